"""Field normalizer.

Maps each platform's native battery keys onto the canonical record. Wifi
networks are passed through untouched so clients read the raw scan keys.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from batwifi.models import CHARGING, DISCHARGING, UNKNOWN, BatteryRecord, WifiNetwork

WINDOWS_CHARGING_STATE_MAP = {
    "1": DISCHARGING,
    "2": CHARGING,
}


def map_battery_keys_linux(battery: Dict[str, str]) -> BatteryRecord:
    return BatteryRecord(
        percentage=battery.get("percentage"),
        state=battery.get("state"),
        time_to_empty=battery.get("time to empty"),
    )


def map_battery_keys_mac(battery: List[str]) -> BatteryRecord:
    def slot(i: int) -> Optional[str]:
        return battery[i] if i < len(battery) else None

    return BatteryRecord(percentage=slot(0), state=slot(1), time_to_empty=slot(2))


def map_battery_keys_windows(battery: Dict[str, str]) -> BatteryRecord:
    status = battery.get("BatteryStatus")
    state = None
    if status:
        state = WINDOWS_CHARGING_STATE_MAP.get(status, UNKNOWN)
    return BatteryRecord(
        percentage=battery.get("EstimatedChargeRemaining"),
        state=state,
        time_to_empty=battery.get("TimeOnBattery"),
    )


def map_wifi_keys(network: WifiNetwork) -> WifiNetwork:
    return network
