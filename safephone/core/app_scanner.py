"""
Installed-app risk classifier.

Scores an app from its install source, the sensitive permissions it
holds and whether its developer is recognized. App records come from
the native enumeration source; nothing leaves the device.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import computed_field

from safephone.core.risk import RiskLevel, worst
from safephone.schemas import CamelModel

logger = logging.getLogger(__name__)

PERMISSION_PREFIX = 'android.permission.'

# Permissions considered dangerous in the local scam context
DANGEROUS_PERMISSIONS = frozenset({
    'READ_SMS',
    'SEND_SMS',
    'RECEIVE_SMS',
    'READ_CALL_LOG',
    'BIND_ACCESSIBILITY_SERVICE',
    'SYSTEM_ALERT_WINDOW',
    'READ_CONTACTS',
    'WRITE_CONTACTS',
    'RECORD_AUDIO',
    'CAMERA',
})

# Known safe developers (banks and common global vendors)
KNOWN_SAFE_DEVELOPERS = [
    'Google',
    'Google LLC',
    'Meta Platforms',
    'WhatsApp',
    'Facebook',
    'Microsoft',
    'Samsung',
    'Amazon',
    'Apple',
    'Adobe',
    'Netflix',
    'Spotify',
    'TikTok',
    'ByteDance',
    'HUAWEI',
    'Xiaomi',
    'OnePlus',
    'LG',
    'Sony',
    'NVIDIA',
    'Intel',
    'Oracle',
    'Cisco',
    'Zoom',
    'Slack',
    'Banco Popular Dominicano',
    'Banreservas',
    'Banco BHD León',
    'Scotiabank',
    'APAP',
    'Banco Caribe',
    'Banco Santa Cruz',
    'BLH',
    'BDI',
    'La Nacional',
    'ACAP',
    'Banesco',
]

OUT_OF_STORE_PENALTY = 2
UNVERIFIED_DEVELOPER_PENALTY = 1
UNKNOWN_DEVELOPER = 'Unknown'

WARNING_OUT_OF_STORE = 'Installed outside the Play Store'
WARNING_UNVERIFIED_DEVELOPER = 'Unverified developer'
MESSAGE_UNVERIFIED_SOURCE = 'Could not verify installed apps'


def short_permission(permission: str) -> str:
    """'android.permission.READ_SMS' and 'READ_SMS' compare equal"""
    permission = permission.strip()
    if permission.startswith(PERMISSION_PREFIX):
        return permission[len(PERMISSION_PREFIX):]
    return permission


def dangerous_subset(permissions: Iterable[str]) -> List[str]:
    """Granted permissions that are on the sensitive list, in input order"""
    return [p for p in permissions if short_permission(p) in DANGEROUS_PERMISSIONS]


def is_known_developer(developer: Optional[str]) -> bool:
    if not developer:
        return False
    developer = developer.lower()
    return any(known.lower() in developer for known in KNOWN_SAFE_DEVELOPERS)


def _penalize_developer(developer: Optional[str], is_from_play_store: bool, dangerous_count: int) -> bool:
    # An unrecognized developer only counts alongside another risk signal
    return not is_known_developer(developer) and (not is_from_play_store or dangerous_count > 0)


def analyze_app_risk(
    is_from_play_store: bool,
    developer: Optional[str],
    permissions: Iterable[str],
    system_app: Optional[bool] = None,
) -> RiskLevel:
    dangerous_count = len(dangerous_subset(permissions))
    if system_app and dangerous_count == 0:
        return RiskLevel.SAFE

    risk_score = 0
    if not is_from_play_store:
        risk_score += OUT_OF_STORE_PENALTY
    risk_score += dangerous_count
    if _penalize_developer(developer, is_from_play_store, dangerous_count):
        risk_score += UNVERIFIED_DEVELOPER_PENALTY

    return RiskLevel.from_score(risk_score)


def build_warning_message(
    is_from_play_store: bool,
    developer: Optional[str],
    permissions: Iterable[str],
) -> str:
    warnings = []
    dangerous_count = len(dangerous_subset(permissions))

    if not is_from_play_store:
        warnings.append(WARNING_OUT_OF_STORE)
    if dangerous_count > 0:
        warnings.append(f'Requests {dangerous_count} dangerous permissions')
    if _penalize_developer(developer, is_from_play_store, dangerous_count):
        warnings.append(WARNING_UNVERIFIED_DEVELOPER)

    return '\n'.join(warnings)


class AppRecord(CamelModel):
    """
    Installed app. Risk fields are derived on every access, so they
    always reflect the current permissions/source/developer.
    """
    id: str
    name: str
    package_name: str
    developer: str = UNKNOWN_DEVELOPER
    is_from_play_store: bool = False
    permissions: List[str] = []
    system_app: Optional[bool] = None
    first_install_time: Optional[int] = None
    last_update_time: Optional[int] = None
    installer_package: Optional[str] = None

    @computed_field
    @property
    def dangerous_permissions(self) -> List[str]:
        return dangerous_subset(self.permissions)

    @computed_field
    @property
    def risk_level(self) -> RiskLevel:
        return analyze_app_risk(
            self.is_from_play_store, self.developer, self.permissions, self.system_app
        )

    @computed_field
    @property
    def warning_message(self) -> str:
        if self.risk_level == RiskLevel.SAFE:
            return ''
        return build_warning_message(self.is_from_play_store, self.developer, self.permissions)


class AppScanReport(CamelModel):
    apps: List[AppRecord] = []
    total: int = 0
    safe: int = 0
    warning: int = 0
    danger: int = 0
    risk: RiskLevel = RiskLevel.SAFE
    message: str = ''


def _dedupe(permissions: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for permission in permissions or []:
        if permission and permission not in seen:
            seen.add(permission)
            result.append(permission)
    return result


def _guess_developer(package_name: str) -> str:
    # com.<vendor>.app -> vendor
    parts = package_name.split('.')
    return parts[1] if len(parts) > 1 and parts[1] else UNKNOWN_DEVELOPER


def app_from_native(raw: Mapping[str, Any]) -> AppRecord:
    """Build an AppRecord from an enumeration-source record"""
    package_name = raw.get('packageName') or ''
    system_app = raw.get('isSystemApp', raw.get('systemApp'))
    is_from_store = raw.get('isFromStore', raw.get('isFromPlayStore'))
    if is_from_store is None:
        is_from_store = not bool(system_app)

    return AppRecord(
        id=str(raw.get('id') or package_name),
        name=raw.get('appName') or raw.get('name') or package_name,
        package_name=package_name,
        developer=raw.get('developer') or _guess_developer(package_name),
        is_from_play_store=bool(is_from_store),
        permissions=_dedupe(raw.get('permissions') or []),
        system_app=system_app,
        first_install_time=raw.get('firstInstallTime'),
        last_update_time=raw.get('lastUpdateTime'),
        installer_package=raw.get('installerPackage'),
    )


def filter_apps_by_risk(apps: Iterable[AppRecord], risk_level: RiskLevel) -> List[AppRecord]:
    return [app for app in apps if app.risk_level == risk_level]


def summarize_apps(apps: List[AppRecord]) -> Dict[str, int]:
    return {
        'total': len(apps),
        'safe': len(filter_apps_by_risk(apps, RiskLevel.SAFE)),
        'warning': len(filter_apps_by_risk(apps, RiskLevel.WARNING)),
        'danger': len(filter_apps_by_risk(apps, RiskLevel.DANGER)),
    }


def scan_apps(raw_apps: Optional[Iterable[Mapping[str, Any]]]) -> AppScanReport:
    """
    Classify every app the enumeration source returned.
    `None` means the source was unavailable: inconclusive, not safe.
    """
    if raw_apps is None:
        logger.warning("App enumeration unavailable; returning inconclusive scan")
        return AppScanReport(risk=RiskLevel.WARNING, message=MESSAGE_UNVERIFIED_SOURCE)

    apps = []
    for raw in raw_apps:
        try:
            apps.append(app_from_native(raw))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipped malformed app record: {e}")

    summary = summarize_apps(apps)
    risk = worst(app.risk_level for app in apps)
    logger.info(
        f"App scan: {summary['total']} apps, "
        f"{summary['warning']} warning, {summary['danger']} danger"
    )
    return AppScanReport(apps=apps, risk=risk, **summary)
