"""
Demo fixtures. NOT production logic.

Canned WiFi scenarios for showing the UI without a native WiFi source.
Picking a scenario without a name is random on purpose, so nothing here
carries the determinism guarantees of the classifiers.
"""

import random
from typing import Optional

from safephone.core.wifi_scanner import classify_wifi
from safephone.schemas import WifiRecord

DEMO_WIFI_SCENARIOS = {
    'safe': {'ssid': 'MiCasa_5G_Segura', 'encryptionType': 'WPA3'},
    'warning': {'ssid': 'Cafe_Internet', 'encryptionType': 'WPA'},
    'danger': {'ssid': 'WIFI_GRATIS_PLAZA', 'encryptionType': 'OPEN'},
}


def demo_wifi_scenario(name: Optional[str] = None, rng: Optional[random.Random] = None) -> WifiRecord:
    """Classified demo connection; random scenario when name is None"""
    if name is None:
        name = (rng or random).choice(sorted(DEMO_WIFI_SCENARIOS))
    if name not in DEMO_WIFI_SCENARIOS:
        raise ValueError(f"Unknown demo scenario: {name}")

    scenario = DEMO_WIFI_SCENARIOS[name]
    return classify_wifi(True, scenario['ssid'], scenario['encryptionType'])
