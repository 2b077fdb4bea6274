from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from enum import Enum

from safephone.core.risk import RiskLevel

# ==========================================
# 🧱 SHARED MODELS
# ==========================================

class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class EncryptionType(str, Enum):
    WPA3 = "WPA3"
    WPA2 = "WPA2"
    WPA = "WPA"
    WEP = "WEP"
    OPEN = "OPEN"
    UNKNOWN = "UNKNOWN"


class PhoneStatus(str, Enum):
    REPORTED = "reported"
    CLEAN = "clean"

# ==========================================
# 📤 VERDICT MODELS
# ==========================================

class UrlVerdict(FrozenCamelModel):
    original_input: str
    uses_https: bool
    is_typosquat: bool
    matched_reason: Optional[str] = None
    suspicious_keywords: List[str] = []
    risk: RiskLevel
    warning_text: str = ""


class EmailVerdict(FrozenCamelModel):
    domain: str
    is_official: bool
    is_typosquat: Optional[bool] = None
    is_reported: bool = False
    reason: str

    @computed_field
    @property
    def risk(self) -> RiskLevel:
        if self.is_reported:
            return RiskLevel.DANGER
        if self.is_official:
            return RiskLevel.SAFE
        return RiskLevel.WARNING


class WifiRecord(FrozenCamelModel):
    ssid: str
    is_connected: bool
    encryption_type: EncryptionType
    encryption_label: str
    is_secure: bool
    has_https_dns: bool
    risk: RiskLevel
    warnings: List[str] = []


class ReportedPhone(FrozenCamelModel):
    number: str
    count: int = Field(ge=1)
    updated_at: int  # epoch milliseconds


class PhoneCheck(FrozenCamelModel):
    number: str
    status: PhoneStatus
    count: Optional[int] = None
    report: Optional[ReportedPhone] = None
    official_bank: Optional[str] = None
    message: str

    @computed_field
    @property
    def is_reported(self) -> bool:
        return self.status == PhoneStatus.REPORTED


class SyncResult(CamelModel):
    pulled: int = 0
    pushed: int = 0

# ==========================================
# 📥 INPUT MODELS
# ==========================================

class UrlSubmission(CamelModel):
    url: str = ""


class EmailSubmission(CamelModel):
    email: str = ""


class PhoneSubmission(CamelModel):
    number: str = ""


class WifiInfo(CamelModel):
    """Raw record handed over by the native WiFi state source"""
    ssid: str = ""
    is_connected: bool = False
    encryption_type: str = "UNKNOWN"


class WifiSubmission(CamelModel):
    wifi: Optional[WifiInfo] = None


class AppSubmission(CamelModel):
    """Raw record handed over by the app enumeration source"""
    name: Optional[str] = None
    app_name: Optional[str] = None
    package_name: str
    developer: Optional[str] = None
    permissions: List[str] = []
    is_system_app: Optional[bool] = None
    is_from_store: Optional[bool] = None
    first_install_time: Optional[int] = None
    last_update_time: Optional[int] = None
    installer_package: Optional[str] = None


class AppsSubmission(CamelModel):
    apps: Optional[List[AppSubmission]] = None


class EmailReportResponse(CamelModel):
    email: str
    reported: bool = True


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    details: Dict[str, Any] = {}
