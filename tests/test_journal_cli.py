#!/usr/bin/env python3
"""Tests for the journal CLI formatting helpers and commands."""

import pytest

from carjournal import EventType, MaintenanceRecord, load_journal
from journal import (
    format_km,
    format_cost,
    format_days,
    truncate,
    parse_item,
    make_history_table,
    main,
)

JOURNAL_YAML = """
car:
  id: yeti
  make: Skoda
  model: Yeti
  year: '2015'
  currency: ₽
records:
  - id: r1
    date: '2024-01-15'
    mileageKm: 100000
    eventType: planned
    title: Scheduled service
    items:
      - name: Engine oil
        cost: 4500
    totalCost: 4500
    carId: yeti
  - id: r2
    date: '2024-06-01'
    mileageKm: 110000
    eventType: refueling
    title: Fuel
    totalCost: 2500
    carId: yeti
"""


@pytest.fixture
def journal_file(tmp_path):
    path = tmp_path / "yeti.yaml"
    path.write_text(JOURNAL_YAML, encoding="utf-8")
    return path


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(50000) == "50,000"
        assert format_km(0) == "0"
        assert format_km(-1500) == "-1,500"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_number(self):
        assert format_cost(75.5) == "75.50"
        assert format_cost(1500, "₽") == "1,500.00 ₽"

    def test_none_returns_dash(self):
        assert format_cost(None, "₽") == "-"


class TestFormatDays:
    """Tests for format_days."""

    def test_none_returns_dash(self):
        assert format_days(None) == "-"

    def test_positive_months_and_days(self):
        assert format_days(105) == "3mo 15d"

    def test_positive_days_only(self):
        assert format_days(14) == "14d"

    def test_negative_months(self):
        assert format_days(-65) == "-2mo 5d"

    def test_negative_days_only(self):
        assert format_days(-10) == "-10d"


class TestTruncate:
    """Tests for truncate."""

    def test_empty_returns_dash(self):
        assert truncate(None) == "-"
        assert truncate("") == "-"

    def test_long_text(self):
        assert truncate("a" * 40, 10) == "aaaaaaa..."


class TestParseItem:
    """Tests for parse_item."""

    def test_name_and_cost(self):
        item = parse_item("Oil filter=800")
        assert item.name == "Oil filter"
        assert item.cost == 800

    def test_name_with_equals_sign(self):
        assert parse_item("A=B=12.5").name == "A=B"

    @pytest.mark.parametrize("spec", ["Oil", "=100", "Oil=abc", "Oil=-1"])
    def test_invalid(self, spec):
        with pytest.raises(ValueError):
            parse_item(spec)


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_rows(self):
        records = [
            MaintenanceRecord(
                "2024-01-15", 100000, EventType.PLANNED, "Service",
                total_cost=4500, currency="₽",
            ),
            MaintenanceRecord("", 0, EventType.FUTURE, "Timing belt"),
        ]
        rows = make_history_table(records)
        assert rows[0] == ["2024-01-15", "100,000", "Planned", "Service", 0, "4,500.00 ₽"]
        assert rows[1] == ["-", "-", "Future", "Timing belt", 0, "-"]


class TestCommands:
    """Tests running CLI commands against a journal file."""

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "status"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_status(self, journal_file, capsys):
        assert main([str(journal_file), "status", "--as-of", "2024-07-01"]) == 0
        out = capsys.readouterr().out
        assert "2015 Skoda Yeti" in out
        assert "15,000 km / 12 mo (default)" in out
        assert "NEXT SERVICE:" in out
        assert "115,000" in out
        assert "2025-01-15" in out
        assert "5,000" in out

    def test_status_overdue(self, journal_file, capsys):
        assert main([str(journal_file), "status", "--as-of", "2025-02-01"]) == 0
        assert "OVERDUE:" in capsys.readouterr().out

    def test_status_invalid_date(self, journal_file, capsys):
        assert main([str(journal_file), "status", "--as-of", "someday"]) == 1

    def test_status_without_planned(self, tmp_path, capsys):
        path = tmp_path / "empty.yaml"
        path.write_text("car:\n  make: Lada\n")
        assert main([str(path), "status"]) == 0
        assert "No planned service recorded yet." in capsys.readouterr().out

    def test_history_filtered(self, journal_file, capsys):
        assert main([str(journal_file), "history", "--type", "refueling"]) == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Fuel" in out
        assert "Scheduled service" not in out

    def test_history_invalid_since(self, journal_file, capsys):
        assert main([str(journal_file), "history", "--since", "yesterday"]) == 1

    def test_stats(self, journal_file, capsys):
        assert main([str(journal_file), "stats", "--as-of", "2024-06-30"]) == 0
        out = capsys.readouterr().out
        assert "7,000.00 ₽" in out
        assert "LAST 6 MONTHS:" in out
        assert "Jun 24" in out
        assert "BY YEAR:" in out

    def test_log_dry_run(self, journal_file, capsys):
        args = [
            str(journal_file), "log", "Brake pads", "--type", "unplanned",
            "--date", "2024-06-20", "--mileage", "111000",
            "--item", "Pads=3900", "--item", "Labour=1500", "--dry-run",
        ]
        assert main(args) == 0
        out = capsys.readouterr().out
        assert "5,400.00 ₽" in out
        assert "dry run" in out
        assert len(load_journal(journal_file).records) == 2

    def test_log_saves_record(self, journal_file):
        args = [
            str(journal_file), "log", "Brake pads", "--type", "unplanned",
            "--date", "2024-06-20", "--mileage", "111000", "--item", "Pads=3900",
        ]
        assert main(args) == 0
        journal = load_journal(journal_file)
        record = journal.records[-1]
        assert record.title == "Brake pads"
        assert record.event_type == EventType.UNPLANNED
        assert record.total_cost == 3900
        assert record.mileage_km == 111000
        assert record.car_id == "yeti"

    def test_log_future_needs_no_date(self, journal_file):
        assert main([str(journal_file), "log", "Timing belt", "--type", "future"]) == 0
        record = load_journal(journal_file).records[-1]
        assert record.event_type == EventType.FUTURE
        assert record.date == ""
        assert record.mileage_km == 0

    def test_log_requires_mileage(self, journal_file, capsys):
        assert main([str(journal_file), "log", "Oil", "--date", "2024-06-20"]) == 1
        assert "--mileage is required" in capsys.readouterr().out

    def test_log_invalid_item(self, journal_file, capsys):
        args = [str(journal_file), "log", "Oil", "--mileage", "1", "--item", "Oil"]
        assert main(args) == 1

    @pytest.mark.parametrize("value", ["20240620", "2024-W25-4"])
    def test_log_rejects_non_extended_dates(self, journal_file, capsys, value):
        """Compact and week dates are refused and nothing is written."""
        args = [str(journal_file), "log", "Oil", "--date", value, "--mileage", "1"]
        assert main(args) == 1
        assert "Error: Invalid date" in capsys.readouterr().out
        assert len(load_journal(journal_file).records) == 2

    def test_log_future_rejects_compact_date(self, journal_file):
        args = [str(journal_file), "log", "Belt", "--type", "future", "--date", "20250101"]
        assert main(args) == 1
        assert len(load_journal(journal_file).records) == 2

    @pytest.mark.parametrize("command", ["status", "stats"])
    @pytest.mark.parametrize("value", ["20240701", "2024-W27-1"])
    def test_as_of_rejects_non_extended_dates(self, journal_file, capsys, command, value):
        assert main([str(journal_file), command, "--as-of", value]) == 1
        assert "Error: Invalid date" in capsys.readouterr().out

    def test_history_since_rejects_compact_date(self, journal_file, capsys):
        assert main([str(journal_file), "history", "--since", "20240101"]) == 1
        assert "Error: Invalid date" in capsys.readouterr().out

    @pytest.mark.parametrize("months", ["0", "-3", "121"])
    def test_stats_months_out_of_range(self, journal_file, capsys, months):
        assert main([str(journal_file), "stats", "--months", months]) == 1
        assert "--months must be between 1 and 120" in capsys.readouterr().out

    def test_stats_months_upper_bound(self, journal_file, capsys):
        args = [str(journal_file), "stats", "--months", "120", "--as-of", "2024-06-30"]
        assert main(args) == 0
        assert "LAST 120 MONTHS:" in capsys.readouterr().out

    def test_intervals(self, journal_file, capsys):
        assert main([str(journal_file), "intervals"]) == 0
        out = capsys.readouterr().out
        assert "Porsche" in out
        assert "Land Rover" in out

    def test_set_interval(self, journal_file):
        assert main([str(journal_file), "set-interval", "10000", "6"]) == 0
        assert load_journal(journal_file).interval.is_custom is True

        assert main([str(journal_file), "set-interval", "--clear"]) == 0
        assert load_journal(journal_file).interval.is_custom is False

    def test_set_interval_requires_both(self, journal_file, capsys):
        assert main([str(journal_file), "set-interval", "10000"]) == 1
        assert load_journal(journal_file).interval.is_custom is False
