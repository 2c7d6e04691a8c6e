import os
import sys
import unittest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from batwifi.models import BatteryRecord  # noqa: E402
from batwifi.parsers.battery import (  # noqa: E402
    _column_offsets,
    parse_battery_linux,
    parse_battery_mac,
    parse_battery_noop,
    parse_battery_windows,
    parse_fixed_width,
)

FIXTURES = os.path.join(ROOT_DIR, "tests", "fixtures")

SPEC_HEADER = "Name  BatteryStatus  EstimatedChargeRemaining  TimeOnBattery"


def read_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES, name), "r", encoding="utf-8", newline="") as f:
        return f.read()


def table(columns, values) -> str:
    """Lay out a header + row with each column two spaces wider than its widest cell."""
    header = ""
    row = ""
    for name, value in zip(columns, values):
        width = max(len(name), len(value)) + 2
        header += name.ljust(width)
        row += value.ljust(width)
    return header + "\n" + row + "\n"


class TestLinuxBattery(unittest.TestCase):
    def test_fixture(self) -> None:
        record = parse_battery_linux(read_fixture("upower.txt"))
        self.assertEqual(record, BatteryRecord("84%", "discharging", "3.4 hours"))

    def test_ignores_unrelated_keys(self) -> None:
        text = "state: charging\nwarning-level: none\npercentage: 40%\ntime to full: 1.2 hours\n"
        self.assertEqual(
            parse_battery_linux(text).to_dict(),
            {"percentage": "40%", "state": "charging", "timeToEmpty": None},
        )

    def test_last_occurrence_wins(self) -> None:
        record = parse_battery_linux("percentage: 10%\npercentage: 11%\n")
        self.assertEqual(record.percentage, "11%")

    def test_splits_on_first_colon(self) -> None:
        record = parse_battery_linux("time to empty: 1:30\n")
        self.assertEqual(record.time_to_empty, "1:30")

    def test_lines_without_colon_dropped(self) -> None:
        record = parse_battery_linux("garbage line\n\n   \nstate:discharging")
        self.assertEqual(record, BatteryRecord(state="discharging"))

    def test_empty_input(self) -> None:
        self.assertEqual(parse_battery_linux("").to_dict(), {"percentage": None, "state": None, "timeToEmpty": None})


class TestMacBattery(unittest.TestCase):
    def test_fixture(self) -> None:
        record = parse_battery_mac(read_fixture("pmset.txt"))
        self.assertEqual(record.percentage, "84%")
        self.assertEqual(record.state, "discharging")
        self.assertEqual(record.time_to_empty, "3:25 remaining present: true")

    def test_missing_tokens_are_none(self) -> None:
        record = parse_battery_mac("100%; charged")
        self.assertEqual(record, BatteryRecord("100%", "charged", None))

    def test_state_text_passed_through(self) -> None:
        self.assertEqual(parse_battery_mac("99%; AC attached; not charging").state, "AC attached")


class TestFixedWidth(unittest.TestCase):
    def test_header_offsets(self) -> None:
        row = "BAT0".ljust(6) + "2".ljust(15) + "87".ljust(26) + "120"
        fields = parse_fixed_width(SPEC_HEADER + "\n" + row)
        self.assertEqual(
            fields,
            {"Name": "BAT0", "BatteryStatus": "2", "EstimatedChargeRemaining": "87", "TimeOnBattery": "120"},
        )

    def test_internal_spacing_does_not_matter(self) -> None:
        columns = ["Name", "BatteryStatus", "EstimatedChargeRemaining", "TimeOnBattery"]
        values = ["Primary Battery", "1", "55", "3600"]
        fields = parse_fixed_width(table(columns, values))
        self.assertEqual(fields, dict(zip(columns, values)))

    def test_reordered_header_with_matching_row(self) -> None:
        columns = ["TimeOnBattery", "EstimatedChargeRemaining", "Name", "BatteryStatus"]
        values = ["120", "87", "BAT0", "2"]
        self.assertEqual(parse_fixed_width(table(columns, values)), dict(zip(columns, values)))

    def test_header_order_matters(self) -> None:
        row = "BAT0".ljust(6) + "2".ljust(15) + "87".ljust(26) + "120"
        reordered = "BatteryStatus  Name  TimeOnBattery  EstimatedChargeRemaining"
        fields = parse_fixed_width(reordered + "\n" + row)
        self.assertNotEqual(fields.get("EstimatedChargeRemaining"), "87")

    def test_last_field_runs_to_end_of_line(self) -> None:
        fields = parse_fixed_width("A  B\n1  long trailing value")
        self.assertEqual(fields["B"], "long trailing value")

    def test_short_row_leaves_empty_fields(self) -> None:
        fields = parse_fixed_width(table(["Name", "TimeOnBattery"], ["BAT0", ""]))
        self.assertEqual(fields["TimeOnBattery"], "")

    def test_repeated_header_token_gets_its_own_offset(self) -> None:
        self.assertEqual(_column_offsets("Status  Status", ["Status", "Status"]), [0, 8])
        fields = parse_fixed_width("Status  Status\nOK      Degraded\n")
        self.assertEqual(fields, {"Status": "Degraded"})

    def test_substring_of_earlier_token_matches_inside_it(self) -> None:
        # "Name" is searched from offset 1, so it is found inside "ClassName".
        self.assertEqual(_column_offsets("ClassName  Name", ["ClassName", "Name"]), [0, 5])
        fields = parse_fixed_width("ClassName  Name\nWin32_Battery  BAT0\n")
        self.assertEqual(fields, {"ClassName": "Win32", "Name": "_Battery  BAT0"})

    def test_fewer_than_two_lines(self) -> None:
        self.assertEqual(parse_fixed_width(""), {})
        self.assertEqual(parse_fixed_width(SPEC_HEADER + "\n\n   \n"), {})


class TestWindowsBattery(unittest.TestCase):
    def test_fixture(self) -> None:
        record = parse_battery_windows(read_fixture("wmic.txt"))
        self.assertEqual(record, BatteryRecord("87", "charging", ""))

    def test_status_codes(self) -> None:
        columns = ["BatteryStatus", "EstimatedChargeRemaining", "TimeOnBattery"]
        cases = {"1": "discharging", "2": "charging", "6": "unknown"}
        for code, state in cases.items():
            record = parse_battery_windows(table(columns, [code, "50", "10"]))
            self.assertEqual(record.state, state)

    def test_missing_status_column(self) -> None:
        record = parse_battery_windows(table(["EstimatedChargeRemaining"], ["50"]))
        self.assertEqual(record, BatteryRecord(percentage="50"))

    def test_header_only_returns_empty_record(self) -> None:
        record = parse_battery_windows(SPEC_HEADER)
        self.assertEqual(record.to_dict(), {"percentage": None, "state": None, "timeToEmpty": None})


class TestNoopBattery(unittest.TestCase):
    def test_noop_returns_empty_record(self) -> None:
        self.assertEqual(parse_battery_noop("anything"), BatteryRecord())


if __name__ == "__main__":
    unittest.main()
