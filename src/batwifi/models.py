"""Canonical records returned to API clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

CHARGING = "charging"
DISCHARGING = "discharging"
UNKNOWN = "unknown"

WifiNetwork = Dict[str, str]
WifiScanResult = Dict[str, WifiNetwork]


@dataclass(frozen=True)
class BatteryRecord:
    percentage: Optional[str] = None
    state: Optional[str] = None
    time_to_empty: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "percentage": self.percentage,
            "state": self.state,
            "timeToEmpty": self.time_to_empty,
        }


EMPTY_BATTERY = BatteryRecord()
