import asyncio

from safephone.core.email_verifier import (
    REASON_CONTAINS_BANK,
    REASON_INVALID,
    REASON_LOOKALIKE,
    REASON_NOT_LISTED,
    REASON_OFFICIAL_SENDER,
    REASON_REPORTED,
    REASON_SUSPICIOUS_TOKENS,
    extract_domain,
    is_generic_root,
    verify_bank_email,
)
from safephone.core.risk import RiskLevel


def verify(email, store=None):
    return asyncio.run(verify_bank_email(email, store))


def test_official_sender_short_circuits():
    verdict = verify("contacto@banreservas.com")
    assert verdict.is_official is True
    assert verdict.reason == REASON_OFFICIAL_SENDER
    assert verdict.domain == "banreservas.com"
    assert verdict.risk == RiskLevel.SAFE


def test_missing_at_sign_is_invalid():
    verdict = verify("banreservas.com")
    assert verdict.is_official is False
    assert verdict.reason == REASON_INVALID
    assert verdict.domain == ""


def test_official_domain_and_subdomain():
    assert verify("notificaciones@bhd.com.do").is_official is True
    verdict = verify("alertas@mail.popularenlinea.com")
    assert verdict.is_official is True
    assert "popularenlinea.com" in verdict.reason


def test_suspicious_tokens():
    verdict = verify("info@pago-rapido.net")
    assert verdict.is_official is False
    assert verdict.reason == REASON_SUSPICIOUS_TOKENS
    assert verdict.risk == RiskLevel.WARNING


def test_embedded_official_domain_is_typosquat():
    verdict = verify("info@banreservas.com.clientes.net")
    assert verdict.is_typosquat is True
    assert verdict.reason == REASON_CONTAINS_BANK


def test_near_miss_is_typosquat():
    verdict = verify("info@banresevas.com")
    assert verdict.is_typosquat is True
    assert verdict.reason == REASON_LOOKALIKE


def test_unrelated_domain_not_listed():
    verdict = verify("juan@gmail.com")
    assert verdict.is_official is False
    assert verdict.is_typosquat is None
    assert verdict.reason == REASON_NOT_LISTED


def test_reported_email_wins_over_similarity(store):
    email = "info@banresevas.com"
    asyncio.run(store.report_email(email))
    verdict = verify(email.upper(), store)
    assert verdict.is_official is False
    assert verdict.is_reported is True
    assert verdict.reason == REASON_REPORTED
    assert verdict.risk == RiskLevel.DANGER


def test_official_sender_beats_report(store):
    asyncio.run(store.report_email("contacto@banreservas.com"))
    assert verify("contacto@banreservas.com", store).is_official is True


def test_extract_domain_uses_last_at():
    assert extract_domain(" a@b@Bhd.com.do ") == "bhd.com.do"
    assert extract_domain("") == ""


def test_generic_roots():
    assert is_generic_root("com.do")
    assert is_generic_root("com")
    assert not is_generic_root("banresevas.com")
