"""
Bank sender email verifier (DR).
- Exact official sender list first.
- Community reports next.
- Official domain allowlist, subdomains accepted.
- Basic heuristics for suspicious or look-alike domains.
"""

import logging
from typing import Optional, TYPE_CHECKING

import tldextract

from safephone.core.registry import (
    OFFICIAL_BANK_DOMAINS,
    is_official_sender,
    is_subdomain_of,
    match_official_domain,
)
from safephone.core.similarity import levenshtein_distance
from safephone.schemas import EmailVerdict

if TYPE_CHECKING:
    from safephone.services.report_store import CommunityReportStore

logger = logging.getLogger(__name__)

SUSPICIOUS_TOKENS = ['seguro', 'soporte', 'support', 'verify', 'update', 'alerta', 'alert', 'pago', 'payment', 'premio']
MAX_TYPOSQUAT_DISTANCE = 2

REASON_INVALID = 'Invalid format'
REASON_OFFICIAL_SENDER = 'Registered official sender'
REASON_REPORTED = 'Reported by users as phishing'
REASON_SUSPICIOUS_TOKENS = 'Unofficial domain with suspicious words'
REASON_CONTAINS_BANK = 'Domain contains a bank name but is not an official domain'
REASON_LOOKALIKE = 'Domain looks like an official one (possible typosquatting)'
REASON_NOT_LISTED = 'Domain is not in the official list'

# Bundled public suffix snapshot only; never fetched over the network
_suffix_extractor = tldextract.TLDExtract(suffix_list_urls=())


def extract_domain(email_address: str) -> str:
    """Substring after the last '@', lower-cased and trimmed"""
    if not email_address or '@' not in email_address:
        return ''
    return email_address.strip().split('@')[-1].strip().lower()


def is_generic_root(domain: str) -> bool:
    """True when the domain is nothing but a public suffix (com, com.do, gob.do...)"""
    try:
        return not _suffix_extractor(domain).domain
    except Exception as e:
        logger.debug(f"Suffix lookup failed for {domain}: {e}")
        return False


def _minimum_distance(domain: str) -> int:
    return min(levenshtein_distance(domain, official) for official in OFFICIAL_BANK_DOMAINS)


async def verify_bank_email(
    email_address: str,
    store: Optional["CommunityReportStore"] = None,
) -> EmailVerdict:
    """
    Classify a sender address.
    `store` is consulted for community reports; without it the
    reported check is skipped.
    """
    domain = extract_domain(email_address)
    if not domain:
        return EmailVerdict(domain=domain, is_official=False, reason=REASON_INVALID)

    # Exact official sender short-circuits everything else
    if is_official_sender(email_address):
        return EmailVerdict(domain=domain, is_official=True, reason=REASON_OFFICIAL_SENDER)

    if store is not None and await store.is_email_reported(email_address):
        return EmailVerdict(
            domain=domain,
            is_official=False,
            is_reported=True,
            reason=REASON_REPORTED,
        )

    official = match_official_domain(domain)
    if official:
        return EmailVerdict(domain=domain, is_official=True, reason=f'Official domain ({official})')

    if any(token in domain for token in SUSPICIOUS_TOKENS):
        return EmailVerdict(domain=domain, is_official=False, reason=REASON_SUSPICIOUS_TOKENS)

    # Prefix/suffix trickery: banreservas.com.evil.net
    for official in OFFICIAL_BANK_DOMAINS:
        if official in domain and not is_subdomain_of(domain, official):
            return EmailVerdict(
                domain=domain,
                is_official=False,
                is_typosquat=True,
                reason=REASON_CONTAINS_BANK,
            )

    if _minimum_distance(domain) <= MAX_TYPOSQUAT_DISTANCE and not is_generic_root(domain):
        return EmailVerdict(
            domain=domain,
            is_official=False,
            is_typosquat=True,
            reason=REASON_LOOKALIKE,
        )

    return EmailVerdict(domain=domain, is_official=False, reason=REASON_NOT_LISTED)
