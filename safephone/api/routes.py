from fastapi import APIRouter, Depends, HTTPException, Request
from typing import List, Dict

from safephone.config import settings
from safephone.core.app_scanner import AppRecord, AppScanReport, app_from_native, scan_apps
from safephone.core.email_verifier import verify_bank_email
from safephone.core.normalize import normalize_email, normalize_phone
from safephone.core.phone_checker import check_phone
from safephone.core.registry import BANK_CONTACTS, get_official_bank_domains, get_safe_banking_urls
from safephone.core.url_classifier import analyze_url
from safephone.core.wifi_scanner import scan_wifi
from safephone.schemas import (
    AppSubmission,
    AppsSubmission,
    EmailReportResponse,
    EmailSubmission,
    EmailVerdict,
    HealthResponse,
    PhoneCheck,
    PhoneSubmission,
    ReportedPhone,
    SyncResult,
    UrlSubmission,
    UrlVerdict,
    WifiRecord,
    WifiSubmission,
)
from safephone.services.report_store import CommunityReportStore

router = APIRouter()


def get_report_store(request: Request) -> CommunityReportStore:
    """Dependency for FastAPI routes (store is built at startup)"""
    store = getattr(request.app.state, "report_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Report store not initialized")
    return store

# ============================================================================
# ANALYSIS ENDPOINTS
# ============================================================================

@router.post("/analyze/url", response_model=UrlVerdict)
def analyze_url_endpoint(submission: UrlSubmission):
    """Score a URL typed or tapped by the user"""
    return analyze_url(submission.url)


@router.post("/analyze/email", response_model=EmailVerdict)
async def analyze_email_endpoint(
    submission: EmailSubmission,
    store: CommunityReportStore = Depends(get_report_store),
):
    return await verify_bank_email(submission.email, store)


@router.post("/analyze/app", response_model=AppRecord)
def analyze_app_endpoint(submission: AppSubmission):
    return app_from_native(submission.model_dump(by_alias=True))


@router.post("/analyze/apps", response_model=AppScanReport)
def analyze_apps_endpoint(submission: AppsSubmission):
    if submission.apps is None:
        return scan_apps(None)
    return scan_apps([app.model_dump(by_alias=True) for app in submission.apps])


@router.post("/analyze/wifi", response_model=WifiRecord)
def analyze_wifi_endpoint(submission: WifiSubmission):
    info = submission.wifi.model_dump(by_alias=True) if submission.wifi else None
    return scan_wifi(info)

# ============================================================================
# COMMUNITY REPORT ENDPOINTS
# ============================================================================

@router.get("/phones/{number}", response_model=PhoneCheck)
async def check_phone_endpoint(number: str, store: CommunityReportStore = Depends(get_report_store)):
    return await check_phone(store, number)


@router.get("/reports/phones", response_model=List[ReportedPhone])
async def list_phone_reports(store: CommunityReportStore = Depends(get_report_store)):
    return await store.list_phones()


@router.post("/reports/phones", response_model=ReportedPhone)
async def report_phone(submission: PhoneSubmission, store: CommunityReportStore = Depends(get_report_store)):
    if not normalize_phone(submission.number):
        raise HTTPException(status_code=400, detail="Enter a suspicious number to report")
    record = await store.report_phone(submission.number)
    if record is None:
        raise HTTPException(status_code=503, detail="Report could not be saved, try again")
    return record


@router.post("/reports/emails", response_model=EmailReportResponse)
async def report_email(submission: EmailSubmission, store: CommunityReportStore = Depends(get_report_store)):
    email = normalize_email(submission.email)
    if not email:
        raise HTTPException(status_code=400, detail="Enter a suspicious email to report")
    if not await store.report_email(email):
        raise HTTPException(status_code=503, detail="Report could not be saved, try again")
    return EmailReportResponse(email=email)


@router.post("/reports/sync", response_model=SyncResult)
async def sync_reports(store: CommunityReportStore = Depends(get_report_store)):
    """Best-effort sync with APP_REPORTS_ENDPOINT; never fails the request"""
    return await store.sync_phones()

# ============================================================================
# REGISTRY ENDPOINTS
# ============================================================================

@router.get("/banks/safe-urls", response_model=List[Dict[str, str]])
def safe_banking_urls():
    return get_safe_banking_urls()


@router.get("/banks/contacts", response_model=List[Dict[str, str]])
def bank_contacts():
    return [dict(contact) for contact in BANK_CONTACTS]


@router.get("/banks/domains", response_model=List[str])
def bank_domains():
    return get_official_bank_domains()


@router.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME,
        version=settings.VERSION,
        details={"sync_configured": bool(settings.APP_REPORTS_ENDPOINT)},
    )
