"""
Phishing URL classifier.

Scores a URL with HTTPS presence, impersonation patterns tuned to
Dominican banks, telecoms and government programs, and a list of scam
keywords. All analysis is local; URLs are never sent anywhere.
"""

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urlparse

from safephone.core.registry import is_official_domain
from safephone.core.risk import RiskLevel
from safephone.schemas import UrlVerdict

logger = logging.getLogger(__name__)

# Impersonation patterns (tested against the hostname only)
PHISHING_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    # Banco Popular (most imitated bank in DR)
    r'bancopopular(?!\.com\.do)',
    r'banco-popular',
    r'bancop0pular',
    r'bancopupular',
    r'bancopoppular',
    r'popularenlinea(?!\.com)',
    r'popular-seguro',
    r'popularseguro',
    r'popular-rd',
    r'bfrpopular',

    # Banreservas
    r'banreservas(?!\.com)',
    r'ban-reservas',
    r'banresevas',
    r'banreservas-seguro',
    r'reservasbank',
    r'banreserva[^s]',

    # BHD Leon
    r'bhdleon(?!\.com\.do)',
    r'bhd-leon',
    r'bhdl30n',
    r'bhdloen',
    r'leonbhd',

    # Scotiabank RD
    r'scotiabank(?!\.com\.do)',
    r'scotia-rd',

    # APAP
    r'apap(?!\.com\.do)',
    r'asociacionpopular(?!\.com)',

    # Telecom "free data" promos
    r'claro(?!\.com\.do).*promo',
    r'altice(?!\.com\.do).*gratis',
    r'viva(?!\.com\.do).*premio',

    # Government (tax and social security scams)
    r'dgii(?!\.gov\.do)',
    r'tss(?!\.gob\.do)',
    r'impuestos-rd',

    # Generic local scam phrasing
    r'seguridad-banco',
    r'verificar-cuenta',
    r'actualizar-datos',
    r'confirmar-identidad',
    r'premio-ganador',
    r'loteria-gratis',
    r'bono-gobierno',
    r'tarjeta-solidaridad',
    r'superate-bono',
    r'fase-rd',

    # WhatsApp lures
    r'whatsapp.*premio',
    r'wa\.me.*banco',

    # Throwaway TLDs
    r'\.(tk|ml|ga|cf|gq|xyz|top|work|click)$',
)]

# Tested against the full URL
SUSPICIOUS_KEYWORDS = [
    # Urgency
    'login-seguro',
    'cuenta-bloqueada',
    'verificacion-urgente',
    'confirmar-ahora',
    'urgente',
    'inmediato',
    'ultima-oportunidad',

    # Fake prizes
    'premio',
    'ganaste',
    'ganador',
    'loteria',
    'sorteo',
    'gratis',
    'regalo',

    # Account threats
    'bloqueo',
    'suspendida',
    'cancelar-cuenta',
    'desactivar',
    'vencido',

    # Government subsidy scams
    'bono-gobierno',
    'subsidio',
    'tarjeta-solidaridad',
    'superate',
    'fase',
    'ayuda-social',

    # Telecom
    'recarga-gratis',
    'datos-gratis',
    'megas-regalo',

    # Bank specific
    'actualizar-token',
    'renovar-clave',
    'desbloquear-tarjeta',
]

HTTP_PENALTY = 2
TYPOSQUAT_PENALTY = 5

TYPOSQUAT_REASON = 'Suspicious domain similar to an official bank'
WARNING_NO_HTTPS = 'This page is NOT secure (no HTTPS)'
WARNING_TYPOSQUAT = ('This domain imitates an official bank',
                     'Possible attempt to STEAL your data')
WARNING_KEYWORDS = 'Contains suspicious words used in scams'


def extract_hostname(url: str) -> str:
    """
    Lower-cased hostname. Schemeless input is parsed as https://;
    unparseable input falls back to the whole trimmed string.
    """
    trimmed = url.strip()
    full_url = trimmed
    if not trimmed.lower().startswith(('http://', 'https://')):
        full_url = 'https://' + trimmed
    try:
        hostname = urlparse(full_url).hostname
    except ValueError as e:
        logger.debug(f"URL parse failed, using raw input as domain: {e}")
        hostname = None
    return (hostname or trimmed).lower()


def uses_https(url: str) -> bool:
    """Explicit https:// or no scheme at all; a bare domain is not penalized"""
    lower_url = url.strip().lower()
    return lower_url.startswith('https://') or (
        not lower_url.startswith('http://') and '://' not in lower_url
    )


def check_typosquatting(hostname: str) -> Tuple[bool, Optional[str]]:
    if is_official_domain(hostname):
        return False, None

    for pattern in PHISHING_PATTERNS:
        if pattern.search(hostname):
            logger.debug(f"Impersonation pattern {pattern.pattern!r} matched {hostname}")
            return True, TYPOSQUAT_REASON

    return False, None


def find_suspicious_keywords(url: str) -> List[str]:
    lower_url = url.lower()
    return [kw for kw in SUSPICIOUS_KEYWORDS if kw in lower_url]


def _build_warning_text(has_https: bool, is_typosquat: bool, keywords: List[str]) -> str:
    warnings = []
    if not has_https:
        warnings.append(WARNING_NO_HTTPS)
    if is_typosquat:
        warnings.extend(WARNING_TYPOSQUAT)
    if keywords:
        warnings.append(WARNING_KEYWORDS)
    return '\n'.join(warnings)


def analyze_url(url: str) -> UrlVerdict:
    """Analyze a URL for phishing indicators"""
    if not url or not url.strip():
        return UrlVerdict(
            original_input='',
            uses_https=False,
            is_typosquat=False,
            risk=RiskLevel.SAFE,
        )

    hostname = extract_hostname(url)
    has_https = uses_https(url)
    is_typosquat, matched_reason = check_typosquatting(hostname)
    keywords = find_suspicious_keywords(url)

    score = 0
    if not has_https:
        score += HTTP_PENALTY
    if is_typosquat:
        score += TYPOSQUAT_PENALTY
    score += len(keywords)

    risk = RiskLevel.from_score(score)
    warning_text = ''
    if risk != RiskLevel.SAFE:
        warning_text = _build_warning_text(has_https, is_typosquat, keywords)

    return UrlVerdict(
        original_input=url,
        uses_https=has_https,
        is_typosquat=is_typosquat,
        matched_reason=matched_reason,
        suspicious_keywords=keywords,
        risk=risk,
        warning_text=warning_text,
    )


def should_show_warning(url: str) -> bool:
    """Quick check: should this URL interrupt the user?"""
    return analyze_url(url).risk != RiskLevel.SAFE
