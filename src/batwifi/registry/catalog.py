"""Command catalog.

One entry per platform: the battery and wifi commands to run and the parser
for each command's output. The entry is resolved once at startup.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from batwifi.models import BatteryRecord, WifiScanResult
from batwifi.parsers.battery import (
    parse_battery_linux,
    parse_battery_mac,
    parse_battery_noop,
    parse_battery_windows,
)
from batwifi.parsers.wifi import parse_wifi_linux, parse_wifi_noop


class Platform(str, enum.Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    OTHER = "other"


LINUX_BATTERY_COMMAND = (
    "upower -i /org/freedesktop/UPower/devices/{battery_device} "
    '| grep -E "state|time to empty|to full|percentage"'
)
LINUX_WIFI_COMMAND = (
    "iwlist {wifi_interface} scanning "
    '| egrep "Cell |Address|Channel|Frequency|Encryption|Quality|Signal level'
    '|Last beacon|Mode|Group Cipher|Pairwise Ciphers|Authentication Suites|ESSID"'
)
MAC_BATTERY_COMMAND = 'pmset -g batt | egrep "([0-9]+%).*" -o'
WINDOWS_BATTERY_COMMAND = "WMIC Path Win32_Battery"


@dataclass(frozen=True)
class CatalogEntry:
    platform: Platform
    battery_command: str
    battery_parser: Callable[[str], BatteryRecord]
    wifi_command: str
    wifi_parser: Callable[[str], WifiScanResult]


def detect_platform(sys_platform: Optional[str] = None) -> Platform:
    name = (sys_platform if sys_platform is not None else sys.platform).lower()
    if name.startswith("linux"):
        return Platform.LINUX
    if name == "darwin":
        return Platform.MACOS
    if name in ("win32", "cygwin"):
        return Platform.WINDOWS
    return Platform.OTHER


def platform_from_setting(value: str) -> Platform:
    """Map a configured platform name (or ``auto``) to a Platform."""
    value = (value or "auto").strip().lower()
    if value == "auto":
        return detect_platform()
    try:
        return Platform(value)
    except ValueError as exc:
        raise ValueError(f"unknown platform: {value}") from exc


def render_command(template: str, battery_device: str = "", wifi_interface: str = "") -> str:
    if "{battery_device}" in template and not battery_device:
        raise ValueError("battery_device is required for this command")
    if "{wifi_interface}" in template and not wifi_interface:
        raise ValueError("wifi_interface is required for this command")
    return template.format(battery_device=battery_device, wifi_interface=wifi_interface)


def resolve_catalog(platform: Platform, options: Optional[Dict[str, Any]] = None) -> CatalogEntry:
    opts = options or {}
    if platform is Platform.LINUX:
        device = opts.get("battery_device", "battery_BAT0")
        iface = opts.get("wifi_interface", "wlan0")
        return CatalogEntry(
            platform=platform,
            battery_command=render_command(LINUX_BATTERY_COMMAND, battery_device=device),
            battery_parser=parse_battery_linux,
            wifi_command=render_command(LINUX_WIFI_COMMAND, wifi_interface=iface),
            wifi_parser=parse_wifi_linux,
        )
    if platform is Platform.MACOS:
        return CatalogEntry(platform, MAC_BATTERY_COMMAND, parse_battery_mac, "", parse_wifi_noop)
    if platform is Platform.WINDOWS:
        return CatalogEntry(platform, WINDOWS_BATTERY_COMMAND, parse_battery_windows, "", parse_wifi_noop)
    return CatalogEntry(Platform.OTHER, "", parse_battery_noop, "", parse_wifi_noop)
