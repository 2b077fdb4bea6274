"""
WiFi connection risk classifier.

Classifies the current connection by encryption strength and flags
SSIDs that look like public/captive-portal networks. The native WiFi
state source hands in {ssid, isConnected, encryptionType} or nothing.
"""

import logging
from typing import Any, List, Mapping, Optional, Tuple

from safephone.core.risk import RiskLevel
from safephone.schemas import EncryptionType, WifiRecord

logger = logging.getLogger(__name__)

PUBLIC_HINTS = ['guest', 'gratis', 'free', 'public', 'wifi', 'café', 'cafe', 'plaza', 'mall', 'hotspot', 'airport']

ENCRYPTION_LABELS = {
    EncryptionType.WPA3: 'WPA3 (Very secure)',
    EncryptionType.WPA2: 'WPA2 (Secure)',
    EncryptionType.WPA: 'WPA (Basic)',
    EncryptionType.WEP: 'WEP (Insecure)',
    EncryptionType.OPEN: 'Open (No password)',
    EncryptionType.UNKNOWN: 'Unknown',
}

# Substring order matters: WPA2 contains WPA
_ENCRYPTION_MATCH_ORDER = (
    EncryptionType.WPA3,
    EncryptionType.WPA2,
    EncryptionType.WPA,
    EncryptionType.WEP,
    EncryptionType.OPEN,
)

WARNING_OPEN = 'Open network: traffic can be intercepted. Avoid banking or shopping; use mobile data or a VPN.'
WARNING_WEAK_CIPHER = 'Weak encryption (WEP/TKIP). Avoid sensitive data; use mobile data or a VPN for banking.'
WARNING_BASIC = 'Unknown or basic encryption. Be careful with sensitive data.'
WARNING_PUBLIC = 'Possible public network or captive portal. Do not enter sensitive data.'
WARNING_UNVERIFIED = 'Could not verify the WiFi connection'


def normalize_encryption(raw: Optional[str]) -> EncryptionType:
    """Map a native encryption string onto the enum"""
    value = (raw or '').upper()
    for kind in _ENCRYPTION_MATCH_ORDER:
        if kind.value in value:
            return kind
    return EncryptionType.UNKNOWN


def encryption_label(kind: EncryptionType) -> str:
    return ENCRYPTION_LABELS[kind]


def looks_public(ssid: str) -> bool:
    ssid_lower = (ssid or '').lower()
    return any(hint in ssid_lower for hint in PUBLIC_HINTS)


def analyze_wifi_security(
    is_connected: bool,
    ssid: str,
    encryption_type: str,
) -> Tuple[RiskLevel, List[str]]:
    """Risk level and ordered warnings for one connection"""
    if not is_connected:
        return RiskLevel.SAFE, []

    raw = (encryption_type or '').upper()
    kind = normalize_encryption(raw)
    weak_cipher = 'TKIP' in raw
    warnings = []

    if kind in (EncryptionType.OPEN, EncryptionType.WEP) or weak_cipher:
        risk = RiskLevel.DANGER
    elif kind in (EncryptionType.WPA, EncryptionType.UNKNOWN):
        risk = RiskLevel.WARNING
    else:
        risk = RiskLevel.SAFE

    if kind == EncryptionType.OPEN:
        warnings.append(WARNING_OPEN)
    if kind == EncryptionType.WEP or weak_cipher:
        warnings.append(WARNING_WEAK_CIPHER)
    if kind in (EncryptionType.WPA, EncryptionType.UNKNOWN) and not weak_cipher:
        warnings.append(WARNING_BASIC)

    if kind == EncryptionType.OPEN and looks_public(ssid):
        warnings.append(WARNING_PUBLIC)

    return risk, warnings


def classify_wifi(is_connected: bool, ssid: str, encryption_type: str) -> WifiRecord:
    kind = normalize_encryption(encryption_type)
    risk, warnings = analyze_wifi_security(is_connected, ssid, encryption_type)
    return WifiRecord(
        ssid=ssid or '',
        is_connected=is_connected,
        encryption_type=kind,
        encryption_label=encryption_label(kind),
        is_secure=risk == RiskLevel.SAFE,
        has_https_dns=kind in (EncryptionType.WPA3, EncryptionType.WPA2),
        risk=risk,
        warnings=warnings,
    )


def scan_wifi(info: Optional[Mapping[str, Any]]) -> WifiRecord:
    """
    Classify the record from the WiFi state source.
    `None` means unavailable or unauthorized: inconclusive, not safe.
    """
    if info is None:
        logger.warning("WiFi info unavailable; returning inconclusive verdict")
        return WifiRecord(
            ssid='',
            is_connected=False,
            encryption_type=EncryptionType.UNKNOWN,
            encryption_label=encryption_label(EncryptionType.UNKNOWN),
            is_secure=False,
            has_https_dns=False,
            risk=RiskLevel.WARNING,
            warnings=[WARNING_UNVERIFIED],
        )

    return classify_wifi(
        bool(info.get('isConnected', False)),
        info.get('ssid') or '',
        info.get('encryptionType') or EncryptionType.UNKNOWN.value,
    )
