import pytest

from safephone.core.registry import OFFICIAL_BANK_DOMAINS
from safephone.core.risk import RiskLevel
from safephone.core.url_classifier import (
    TYPOSQUAT_REASON,
    WARNING_KEYWORDS,
    WARNING_NO_HTTPS,
    analyze_url,
    extract_hostname,
    find_suspicious_keywords,
    should_show_warning,
    uses_https,
)


@pytest.mark.parametrize("domain", OFFICIAL_BANK_DOMAINS)
def test_official_domains_are_safe(domain):
    verdict = analyze_url(domain)
    assert verdict.risk == RiskLevel.SAFE
    assert verdict.is_typosquat is False
    assert verdict.warning_text == ""


@pytest.mark.parametrize("domain", ["banreservas.com", "bhd.com.do", "apap.com.do"])
def test_official_domains_over_https_are_safe(domain):
    assert analyze_url(f"https://{domain}/personas").risk == RiskLevel.SAFE


def test_impersonation_without_scheme_is_danger():
    verdict = analyze_url("bancopopular-seguro.com")
    assert verdict.is_typosquat is True
    assert verdict.uses_https is True
    assert verdict.matched_reason == TYPOSQUAT_REASON
    assert verdict.suspicious_keywords == []
    assert verdict.risk == RiskLevel.DANGER


def test_plain_http_alone_is_warning():
    verdict = analyze_url("http://example.org")
    assert verdict.uses_https is False
    assert verdict.risk == RiskLevel.WARNING
    assert verdict.warning_text == WARNING_NO_HTTPS


def test_clean_https_url_is_safe():
    verdict = analyze_url("https://www.wikipedia.org/wiki/Santo_Domingo")
    assert verdict.risk == RiskLevel.SAFE
    assert not should_show_warning("https://www.wikipedia.org")


def test_keywords_are_scanned_in_path():
    verdict = analyze_url("https://example.org/premio/ganaste?urgente=1")
    assert verdict.suspicious_keywords == ["urgente", "premio", "ganaste"]
    assert verdict.risk == RiskLevel.WARNING
    assert verdict.warning_text == WARNING_KEYWORDS


def test_warning_lines_follow_fixed_order():
    verdict = analyze_url("http://banreservas-seguro.tk/premio")
    lines = verdict.warning_text.split("\n")
    assert lines[0] == WARNING_NO_HTTPS
    assert lines[-1] == WARNING_KEYWORDS
    assert len(lines) == 4
    assert verdict.risk == RiskLevel.DANGER


def test_throwaway_tld_is_flagged():
    assert analyze_url("https://mi-cuenta.xyz").is_typosquat is True


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_blank_input_is_safe_without_https(raw):
    verdict = analyze_url(raw)
    assert verdict.risk == RiskLevel.SAFE
    assert verdict.uses_https is False
    assert verdict.warning_text == ""


def test_hostname_extraction():
    assert extract_hostname("HTTPS://WWW.BHD.COM.DO/path") == "www.bhd.com.do"
    assert extract_hostname("popularenlinea.com/login") == "popularenlinea.com"


def test_unparseable_input_falls_back_to_raw_text():
    assert extract_hostname("http://[bad") == "http://[bad"


def test_https_rules():
    assert uses_https("https://bhd.com.do")
    assert uses_https("bhd.com.do")
    assert not uses_https("HTTP://bhd.com.do")
    assert not uses_https("ftp://bhd.com.do")


def test_keyword_scan_is_case_insensitive():
    assert find_suspicious_keywords("https://x.org/GRATIS") == ["gratis"]
