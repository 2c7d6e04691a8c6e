"""Battery parsers, one per platform tool.

Parsers never fail on missing data: incomplete output yields a partial or
empty record. Only a structurally broken input may raise.
"""

from __future__ import annotations

from typing import Dict, List

from batwifi.models import EMPTY_BATTERY, BatteryRecord
from batwifi.parsers.normalize import (
    map_battery_keys_linux,
    map_battery_keys_mac,
    map_battery_keys_windows,
)


def _parse_key_value_lines(text: str) -> Dict[str, str]:
    battery: Dict[str, str] = {}
    for line in (text or "").split("\n"):
        line = line.strip()
        if not line:
            continue
        key, sep, val = line.partition(":")
        if not sep:
            continue
        battery[key.strip()] = val.strip()
    return battery


def parse_battery_linux(stdout: str) -> BatteryRecord:
    """Parse ``upower -i`` output ("key: value" per line)."""
    return map_battery_keys_linux(_parse_key_value_lines(stdout))


def parse_battery_mac(stdout: str) -> BatteryRecord:
    """Parse ``pmset -g batt`` output, e.g. ``85%; discharging; 4:12 remaining``."""
    tokens = [t.strip() for t in (stdout or "").split(";")]
    return map_battery_keys_mac(tokens)


def _column_offsets(header: str, names: List[str]) -> List[int]:
    # First occurrence of each name, searching past the previous match so a
    # repeated substring never maps two columns to the same offset.
    offsets: List[int] = []
    last = -1
    for name in names:
        last = header.find(name, last + 1)
        offsets.append(last)
    return offsets


def parse_fixed_width(stdout: str) -> Dict[str, str]:
    """Slice a header + data line table at the header tokens' start offsets."""
    lines = [l.strip() for l in (stdout or "").split("\n")]
    lines = [l for l in lines if l]
    if len(lines) < 2:
        return {}

    header, row = lines[0], lines[1]
    names = header.split()
    offsets = _column_offsets(header, names)

    fields: Dict[str, str] = {}
    for i, name in enumerate(names):
        start = offsets[i]
        end = offsets[i + 1] if i + 1 < len(offsets) else len(row)
        fields[name] = row[start:end].strip()
    return fields


def parse_battery_windows(stdout: str) -> BatteryRecord:
    """Parse ``WMIC Path Win32_Battery`` tabular output."""
    fields = parse_fixed_width(stdout)
    if not fields:
        return EMPTY_BATTERY
    return map_battery_keys_windows(fields)


def parse_battery_noop(stdout: str) -> BatteryRecord:
    _ = stdout
    return EMPTY_BATTERY
