from safephone.core.app_scanner import (
    MESSAGE_UNVERIFIED_SOURCE,
    WARNING_OUT_OF_STORE,
    WARNING_UNVERIFIED_DEVELOPER,
    analyze_app_risk,
    app_from_native,
    build_warning_message,
    dangerous_subset,
    filter_apps_by_risk,
    is_known_developer,
    scan_apps,
    summarize_apps,
)
from safephone.core.risk import RiskLevel

SMS_STEALER = ["READ_SMS", "SEND_SMS", "READ_CONTACTS"]


def test_system_app_without_dangerous_permissions_is_safe():
    assert analyze_app_risk(False, None, ["INTERNET"], system_app=True) == RiskLevel.SAFE


def test_system_app_with_dangerous_permissions_is_scored():
    assert analyze_app_risk(False, None, SMS_STEALER, system_app=True) == RiskLevel.DANGER


def test_sideloaded_sms_stealer_is_danger():
    # 2 (sideloaded) + 3 (permissions) + 1 (unknown developer)
    assert analyze_app_risk(False, "Desconocido SRL", SMS_STEALER) == RiskLevel.DANGER


def test_unknown_developer_alone_is_not_penalized():
    assert analyze_app_risk(True, "Some Indie Studio", ["INTERNET"]) == RiskLevel.SAFE


def test_store_app_with_two_dangerous_permissions_is_warning():
    assert analyze_app_risk(True, "Google LLC", ["CAMERA", "RECORD_AUDIO"]) == RiskLevel.WARNING


def test_full_permission_names_are_recognized():
    perms = ["android.permission.READ_SMS", "android.permission.INTERNET", "CAMERA"]
    assert dangerous_subset(perms) == ["android.permission.READ_SMS", "CAMERA"]


def test_developer_match_is_case_insensitive_substring():
    assert is_known_developer("banco popular dominicano, S.A.")
    assert not is_known_developer("")
    assert not is_known_developer(None)


def test_warning_message_lines_in_order():
    message = build_warning_message(False, "Desconocido", SMS_STEALER)
    assert message.split("\n") == [
        WARNING_OUT_OF_STORE,
        "Requests 3 dangerous permissions",
        WARNING_UNVERIFIED_DEVELOPER,
    ]


def test_app_from_native_record():
    app = app_from_native({
        "appName": "Bono Gobierno",
        "packageName": "com.bonofacil.app",
        "permissions": ["android.permission.READ_SMS", "android.permission.READ_SMS", "SEND_SMS"],
        "isSystemApp": False,
        "isFromStore": False,
        "firstInstallTime": 1700000000000,
    })
    assert app.id == "com.bonofacil.app"
    assert app.name == "Bono Gobierno"
    assert app.developer == "bonofacil"
    assert app.permissions == ["android.permission.READ_SMS", "SEND_SMS"]
    assert app.risk_level == RiskLevel.DANGER
    assert app.warning_message.startswith(WARNING_OUT_OF_STORE)

    dumped = app.model_dump(by_alias=True)
    assert dumped["riskLevel"] == RiskLevel.DANGER
    assert dumped["dangerousPermissions"] == ["android.permission.READ_SMS", "SEND_SMS"]


def test_safe_app_has_no_warning_message():
    app = app_from_native({"packageName": "com.google.android.gm", "developer": "Google LLC",
                           "isFromStore": True, "permissions": ["INTERNET"]})
    assert app.risk_level == RiskLevel.SAFE
    assert app.warning_message == ""


def test_risk_follows_current_permissions():
    app = app_from_native({"packageName": "com.google.android.gm", "developer": "Google LLC",
                           "isFromStore": True})
    assert app.risk_level == RiskLevel.SAFE
    app.permissions = ["READ_SMS", "SEND_SMS"]
    assert app.risk_level == RiskLevel.WARNING


def test_scan_apps_summary():
    report = scan_apps([
        {"packageName": "com.android.settings", "isSystemApp": True},
        {"packageName": "com.whatsapp", "developer": "WhatsApp", "isFromStore": True,
         "permissions": ["CAMERA", "READ_CONTACTS"]},
        {"packageName": "com.premio.apk", "isFromStore": False, "permissions": SMS_STEALER},
    ])
    assert (report.total, report.safe, report.warning, report.danger) == (3, 1, 1, 1)
    assert report.risk == RiskLevel.DANGER
    assert [a.package_name for a in filter_apps_by_risk(report.apps, RiskLevel.DANGER)] == ["com.premio.apk"]
    assert summarize_apps(report.apps)["total"] == 3


def test_scan_apps_skips_malformed_records():
    report = scan_apps([{"packageName": "com.ok.app", "isFromStore": True}, {"permissions": 42}])
    assert report.total == 1


def test_unavailable_app_source_is_inconclusive():
    report = scan_apps(None)
    assert report.risk == RiskLevel.WARNING
    assert report.message == MESSAGE_UNVERIFIED_SOURCE
    assert report.apps == []
