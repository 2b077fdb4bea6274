"""
Official-entity registry for Dominican banks.

Static, compiled-in allowlists: bank domains, exact official sender
addresses and official contact phone numbers. Nothing here is mutated
at runtime.
"""

from typing import Dict, List, Optional

from safephone.core.normalize import normalize_email, normalize_phone

# Bank portals plus the domains banks send email from
OFFICIAL_BANK_DOMAINS = (
    # Main banks
    'banreservas.com',
    'banreservas.com.do',
    'popularenlinea.com',
    'bpd.com.do',
    'bpservices.com',
    'bancopopular.com.do',
    'bhd.com.do',
    'bhdleon.com.do',
    'bsc.com.do',           # Banco Santa Cruz
    'do.scotiabank.com',
    'scotiabank.com.do',
    'scotiabank.com',
    'banesco.com.do',
    'bancolafise.com',
    'bancolafise.com.do',
    'bancocaribe.com.do',
    'banviv.com.do',        # Vimenca
    'blh.com.do',           # Lopez de Haro
    'bdi.com.do',
    'apap.com.do',
    'acap.com.do',
    'lanacional.com.do',
    'bagricola.gob.do',
    'bandex.com.do',
    'bancoademi.com.do',
    'cibao.com.do',
    'promerica.com.do',
    'bv.com.do',
    'bancovimencaservicios.com',
    'lafise.com',
    'banfondesa.com.do',
    'motorcredito.com.do',
    'alaver.com.do',
    'adopem.com.do',
    'adap.com.do',
    # Institutional reference
    'citi.com',
)

# Exact sender addresses published by each bank
BANK_OFFICIAL_EMAILS = frozenset({
    # Banreservas
    'contacto@banreservas.com',
    'mensajealadministrador@banreservas.com',
    # Banco Popular Dominicano
    'contactenos@bpd.com.do',
    'reclamaciones@bpd.com.do',
    'vozdelcliente@bpd.com.do',
    # Banco BHD
    'servicioalcliente@bhd.com.do',
    'servicioalcliente@bhdleon.com.do',
    # Scotiabank RD
    'drinfo@scotiabank.com',
    'serviciosamex@scotiabank.com',
    'afiliacionamex@scotiabank.com',
    # APAP
    'servicioalcliente@apap.com.do',
    'candidatos@apap.com.do',
    # Banco Santa Cruz
    'vacantes@bsc.com.do',
    # Asociacion Cibao
    'info@cibao.com.do',
    'empleos@cibao.com',
    # Banco Promerica
    'servicio@promerica.com.do',
    'gestionhumana@promerica.com.do',
    # Banco Caribe
    'servicio@bancocaribe.com.do',
    'empleos@bancocaribe.com',
    # Banesco
    'tuvoz@banesco.com.do',
    'defensor_del_cliente@banesco.com',
    # BDI
    'bdiinforma@bdi.com.do',
    'bdimercadeo@bdi.com.do',
    'phishing@bdi.com.do',
    # Ademi
    'info@ademi.com.do',
    # La Nacional (ALNAP)
    'info@alnap.com.do',
    # Bagricola
    'bagricola@bagricola.gob.do',
    # Bandex
    'negocios@bandex.com.do',
    'gente@bandex.com',
    # BLH
    'info@blh.com.do',
    # Citibank RD
    'citiservicedominicana@citi.com',
    'gabriella.hache@citi.com',
    # Banco Vimenca
    'teleasistencia@bv.com.do',
    'info@bancovimencaservicios.com',
    # Lafise
    'servicioalclienterd@lafise.com',
    # Banfondesa
    'info@banfondesa.com.do',
    # Motor Credito
    'info@motorcredito.com.do',
    # Alaver
    'contacto@alaver.com.do',
    'vacantes@alaver.com.do',
    # Adopem
    'info@adopem.com.do',
    'empleo@adopem.com.do',
    'servicioalusuario@adopem.com.do',
    'vozdelcliente@adopem.com.do',
    # Asociacion Duarte (ADAP)
    'contacto@adap.com.do',
})

BANK_CONTACTS: List[Dict[str, str]] = [
    {'name': 'Banreservas', 'phone': '809-960-2121', 'site': 'https://www.banreservas.com'},
    {'name': 'Banco Popular', 'phone': '809-544-5555', 'site': 'https://www.popularenlinea.com'},
    {'name': 'BHD León', 'phone': '809-243-5050', 'site': 'https://www.bhdleon.com.do'},
    {'name': 'Scotiabank RD', 'phone': '809-567-7268', 'site': 'https://www.scotiabank.com.do'},
    {'name': 'APAP', 'phone': '809-689-2727', 'site': 'https://www.apap.com.do'},
    {'name': 'Banco Caribe', 'phone': '809-473-2100', 'site': 'https://www.bancocaribe.com.do'},
    {'name': 'Banco Santa Cruz', 'phone': '809-541-1000', 'site': 'https://www.bsc.com.do'},
    {'name': 'BLH (López de Haro)', 'phone': '809-563-2400', 'site': 'https://www.blh.com.do'},
    {'name': 'BDI', 'phone': '809-689-3131', 'site': 'https://www.bdi.com.do'},
    {'name': 'La Nacional', 'phone': '809-731-3333', 'site': 'https://www.lanacional.com.do'},
    {'name': 'ACAP', 'phone': '809-581-5001', 'site': 'https://www.acap.com.do'},
]

SAFE_BANKING_URLS: List[Dict[str, str]] = [
    {'name': 'Banreservas', 'url': 'https://www.banreservas.com'},
    {'name': 'Banreservas .com.do', 'url': 'https://www.banreservas.com.do'},
    {'name': 'Popular en Línea', 'url': 'https://www.popularenlinea.com'},
    {'name': 'Popular (bpd.com.do mail)', 'url': 'https://www.bancopopular.com.do'},
    {'name': 'BHD', 'url': 'https://www.bhd.com.do'},
    {'name': 'Banco Santa Cruz', 'url': 'https://www.bsc.com.do'},
    {'name': 'Scotiabank RD', 'url': 'https://do.scotiabank.com'},
    {'name': 'Banesco RD', 'url': 'https://www.banesco.com.do'},
    {'name': 'Banco Lafise RD', 'url': 'https://www.bancolafise.com.do'},
    {'name': 'Banco Caribe', 'url': 'https://www.bancocaribe.com.do'},
    {'name': 'Banco López de Haro', 'url': 'https://www.blh.com.do'},
    {'name': 'APAP', 'url': 'https://www.apap.com.do'},
    {'name': 'ACAP', 'url': 'https://www.acap.com.do'},
    {'name': 'La Nacional', 'url': 'https://www.lanacional.com.do'},
    {'name': 'Bagricola', 'url': 'https://www.bagricola.gob.do'},
    {'name': 'Bandex', 'url': 'https://www.bandex.com.do'},
    {'name': 'ADEMI', 'url': 'https://www.bancoademi.com.do'},
    {'name': 'Asociación Cibao', 'url': 'https://www.cibao.com.do'},
    {'name': 'Promerica', 'url': 'https://www.promerica.com.do'},
    {'name': 'Vimenca', 'url': 'https://www.bv.com.do'},
    {'name': 'Vimenca Servicios', 'url': 'https://www.bancovimencaservicios.com'},
    {'name': 'Lafise', 'url': 'https://www.lafise.com'},
    {'name': 'Banfondesa', 'url': 'https://www.banfondesa.com.do'},
    {'name': 'Motor Crédito', 'url': 'https://www.motorcredito.com.do'},
    {'name': 'Alaver', 'url': 'https://www.alaver.com.do'},
    {'name': 'Adopem', 'url': 'https://www.adopem.com.do'},
    {'name': 'Asociación Duarte (ADAP)', 'url': 'https://www.adap.com.do'},
]

# Local numbers are 10 digits; a leading +1 / 1 country code is ignored
_LOCAL_NUMBER_DIGITS = 10


def is_subdomain_of(candidate: str, root: str) -> bool:
    """True for root itself or any dot-subdomain of it"""
    return candidate == root or candidate.endswith(f'.{root}')


def match_official_domain(domain: str) -> Optional[str]:
    """Registry entry that domain equals or is a subdomain of, else None"""
    if not domain:
        return None
    domain = domain.strip().lower()
    for official in OFFICIAL_BANK_DOMAINS:
        if is_subdomain_of(domain, official):
            return official
    return None


def is_official_domain(domain: str) -> bool:
    return match_official_domain(domain) is not None


def is_official_sender(email: str) -> bool:
    return normalize_email(email) in BANK_OFFICIAL_EMAILS


def find_bank_contact(raw_phone: str) -> Optional[Dict[str, str]]:
    """Official bank contact whose number matches raw_phone"""
    digits = normalize_phone(raw_phone).lstrip('+')
    if len(digits) < _LOCAL_NUMBER_DIGITS:
        return None
    local = digits[-_LOCAL_NUMBER_DIGITS:]
    for contact in BANK_CONTACTS:
        if normalize_phone(contact['phone'])[-_LOCAL_NUMBER_DIGITS:] == local:
            return dict(contact)
    return None


def get_official_bank_domains() -> List[str]:
    return list(OFFICIAL_BANK_DOMAINS)


def get_safe_banking_urls() -> List[Dict[str, str]]:
    return [dict(entry) for entry in SAFE_BANKING_URLS]
