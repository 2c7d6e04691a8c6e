"""Wifi scan parser for ``iwlist <iface> scanning`` output.

The scan is a sequence of cells. A cell starts on a line such as::

    Cell 01 - Address: DC:0B:1A:47:BA:07

and every following line until the next cell (or end of input) carries one
or two fields of that network.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from batwifi.models import WifiNetwork, WifiScanResult
from batwifi.parsers.normalize import map_wifi_keys

CELL_PREFIX = "Cell"
CELL_SEPARATOR = "-"
ADDRESS_PREFIX = "Address"
QUALITY_PREFIX = "Quality"
SIGNAL_PREFIX = "Signal level"
EXTRA_PREFIX = "Extra"


def _parse_address(cell: WifiNetwork, line: str) -> None:
    # Address: DC:0B:1A:47:BA:07
    parts = line.split(":")[1:]
    if parts:
        cell[ADDRESS_PREFIX] = ":".join(parts).strip()


def _parse_quality(cell: WifiNetwork, line: str) -> None:
    # Quality=41/70  Signal level=-69 dBm
    segments = line.split(SIGNAL_PREFIX)
    cell[QUALITY_PREFIX] = segments[0].split("=")[1].strip()
    if len(segments) > 1:
        cell[SIGNAL_PREFIX] = segments[1].split("=")[1].strip()


def _parse_extra(cell: WifiNetwork, line: str) -> None:
    # Extra: Last beacon: 1020ms ago
    parts = line.split(":")
    if len(parts) > 2:
        cell[parts[1].strip()] = parts[2].strip()


def _parse_default(cell: WifiNetwork, line: str) -> None:
    key, sep, val = line.partition(":")
    if sep:
        cell[key.strip()] = val.strip()


LineHandler = Callable[[WifiNetwork, str], None]

LINE_HANDLERS: List[Tuple[Callable[[str], bool], LineHandler]] = [
    (lambda line: line.startswith(ADDRESS_PREFIX), _parse_address),
    (lambda line: line.startswith(QUALITY_PREFIX), _parse_quality),
    (lambda line: line.startswith(EXTRA_PREFIX), _parse_extra),
    (lambda line: True, _parse_default),
]


def parse_wifi_line(cell: WifiNetwork, line: str) -> WifiNetwork:
    """Add the field(s) found on one scan line to ``cell``."""
    line = (line or "").strip()
    if not line:
        return cell
    for matches, handler in LINE_HANDLERS:
        if matches(line):
            handler(cell, line)
            break
    return cell


def parse_wifi_linux(stdout: str) -> WifiScanResult:
    networks: WifiScanResult = {}
    cell_id: Optional[str] = None
    cell: WifiNetwork = {}

    for raw in (stdout or "").split("\n"):
        line = raw.strip()
        if not line:
            continue
        if line.startswith(CELL_PREFIX):
            if cell_id is not None:
                networks[cell_id] = map_wifi_keys(cell)
            head, sep, line = line.partition(CELL_SEPARATOR)
            if not sep:
                raise IndexError(f"cell line without '{CELL_SEPARATOR}' separator: {head[:60]}")
            cell_id = head.strip()
            cell = {}
        elif cell_id is None:
            # Fields before the first cell have no network to belong to.
            continue
        parse_wifi_line(cell, line)

    if cell_id is not None:
        networks[cell_id] = map_wifi_keys(cell)
    return networks


def parse_wifi_noop(stdout: str) -> WifiScanResult:
    _ = stdout
    return {}
