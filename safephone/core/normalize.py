import re

_NON_PHONE_CHARS = re.compile(r'[^0-9+]')


def normalize_phone(raw: str) -> str:
    """Keep digits and '+' only. Idempotent."""
    if not raw:
        return ''
    return _NON_PHONE_CHARS.sub('', raw)


def normalize_email(raw: str) -> str:
    """Trim and lower-case. Idempotent."""
    if not raw:
        return ''
    return raw.strip().lower()
