from safephone.core.normalize import normalize_email, normalize_phone
from safephone.core.registry import (
    BANK_CONTACTS,
    OFFICIAL_BANK_DOMAINS,
    find_bank_contact,
    get_official_bank_domains,
    get_safe_banking_urls,
    is_official_domain,
    is_official_sender,
    match_official_domain,
)


def test_normalize_phone_keeps_digits_and_plus():
    assert normalize_phone("+1 (809) 555-1234") == "+18095551234"
    assert normalize_phone("") == ""
    assert normalize_phone(normalize_phone("809.555.1234")) == "8095551234"


def test_normalize_email_trims_and_lowercases():
    assert normalize_email("  Contacto@BanReservas.com ") == "contacto@banreservas.com"
    assert normalize_email(None) == ""


def test_exact_and_subdomain_match():
    assert match_official_domain("banreservas.com") == "banreservas.com"
    assert match_official_domain("mail.banreservas.com") == "banreservas.com"
    assert is_official_domain("WWW.BHD.COM.DO")


def test_lookalikes_are_not_official():
    assert not is_official_domain("banreservas.com.evil.net")
    assert not is_official_domain("xbanreservas.com")
    assert not is_official_domain("")


def test_official_sender_is_case_insensitive():
    assert is_official_sender("Contacto@Banreservas.com")
    assert not is_official_sender("soporte@banreservas.com")


def test_domain_table_has_portal_and_mail_domains():
    domains = get_official_bank_domains()
    assert "popularenlinea.com" in domains
    assert "bpd.com.do" in domains
    assert len(domains) == len(set(OFFICIAL_BANK_DOMAINS))


def test_safe_urls_are_copies():
    urls = get_safe_banking_urls()
    urls[0]["url"] = "https://evil.example"
    assert get_safe_banking_urls()[0]["url"] != "https://evil.example"


def test_find_bank_contact_ignores_formatting_and_country_code():
    contact = find_bank_contact("+1 809 960 2121")
    assert contact is not None
    assert contact["name"] == "Banreservas"
    assert find_bank_contact("8099602121")["name"] == "Banreservas"


def test_find_bank_contact_unknown_or_short():
    assert find_bank_contact("809-000-0000") is None
    assert find_bank_contact("2121") is None


def test_every_contact_resolves_to_itself():
    for contact in BANK_CONTACTS:
        assert find_bank_contact(contact["phone"])["name"] == contact["name"]
