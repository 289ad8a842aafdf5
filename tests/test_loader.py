#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

import pytest
import yaml

from carjournal import (
    CarProfile,
    EventType,
    Journal,
    MaintenanceRecord,
    RecordItem,
    create_journal,
    delete_journal,
    delete_record,
    load_journal,
    save_car_profile,
    save_record,
    set_custom_interval,
    update_record,
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
      - itemId: i1
        name: Engine oil
        cost: 4500
      - itemId: i2
        name: Oil filter
        cost: 800
    totalCost: 5300
    currency: ₽
    carId: yeti
  - id: r2
    date: ''
    eventType: future
    title: Timing belt
"""


@pytest.fixture
def journal_file(tmp_path):
    path = tmp_path / "yeti.yaml"
    path.write_text(JOURNAL_YAML, encoding="utf-8")
    return path


# =============================================================================
# load_journal tests
# =============================================================================


class TestLoadJournal:
    """Tests for load_journal function."""

    def test_loads_minimal_journal(self, tmp_path):
        """Load a journal with only a car section."""
        path = tmp_path / "minimal.yaml"
        path.write_text("car:\n  make: Lada\n")

        journal = load_journal(path)

        assert isinstance(journal, Journal)
        assert isinstance(journal.car, CarProfile)
        assert journal.car.make == "Lada"
        assert journal.records == []

    def test_loads_car(self, journal_file):
        car = load_journal(journal_file).car
        assert car.id == "yeti"
        assert car.model == "Yeti"
        assert car.year == "2015"
        assert car.currency == "₽"
        assert car.custom_interval_km is None

    def test_loads_records(self, journal_file):
        journal = load_journal(journal_file)

        assert len(journal.records) == 2
        record = journal.records[0]
        assert isinstance(record, MaintenanceRecord)
        assert record.id == "r1"
        assert record.event_type == EventType.PLANNED
        assert record.mileage_km == 100000
        assert record.total_cost == 5300
        assert record.car_id == "yeti"
        assert [type(i) for i in record.items] == [RecordItem, RecordItem]
        assert record.items[1].name == "Oil filter"
        assert record.items[1].cost == 800
        assert record.items[1].item_id == "i2"

    def test_loads_future_record_defaults(self, journal_file):
        future = load_journal(journal_file).records[1]
        assert future.event_type == EventType.FUTURE
        assert future.date == ""
        assert future.mileage_km == 0
        assert future.items == []
        assert future.total_cost == 0

    def test_normalizes_decimal_strings(self, tmp_path):
        """Costs stored as decimal strings become numbers."""
        path = tmp_path / "decimal.yaml"
        path.write_text("""
car:
  make: Lada
records:
  - date: '2024-05-01'
    mileageKm: '12000'
    eventType: unplanned
    items:
      - name: Wiper
        cost: '350.50'
    totalCost: '350.50'
""")
        record = load_journal(path).records[0]
        assert record.total_cost == 350.5
        assert record.items[0].cost == 350.5
        assert record.mileage_km == 12000

    def test_unquoted_dates(self, tmp_path):
        """YAML dates written without quotes still load as ISO strings."""
        path = tmp_path / "dates.yaml"
        path.write_text("""
car:
  make: Lada
records:
  - date: 2024-05-01
    mileageKm: 12000
    eventType: refueling
    totalCost: 2500
""")
        assert load_journal(path).records[0].date == "2024-05-01"

    def test_loads_custom_interval(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("""
car:
  make: Lada
  customIntervalKm: 10000
  customIntervalMonths: 6
""")
        journal = load_journal(path)
        assert journal.interval.interval_km == 10000
        assert journal.interval.is_custom is True

    def test_custom_interval_strings_become_numbers(self, tmp_path):
        """Interval overrides stored as strings load as ints."""
        path = tmp_path / "custom.yaml"
        path.write_text("""
car:
  make: Lada
  customIntervalKm: '10000'
  customIntervalMonths: '6.0'
""")
        journal = load_journal(path)
        assert journal.car.custom_interval_km == 10000
        assert journal.car.custom_interval_months == 6
        assert journal.interval.interval_km == 10000
        assert journal.interval.is_custom is True

    def test_blank_custom_interval_is_unset(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("""
car:
  make: Lada
  customIntervalKm: ''
  customIntervalMonths: 6
""")
        car = load_journal(path).car
        assert car.custom_interval_km is None
        assert load_journal(path).interval.is_custom is False

    def test_not_a_journal(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("foo: bar\n")
        with pytest.raises(ValueError):
            load_journal(path)


# =============================================================================
# Record write tests
# =============================================================================


class TestSaveRecord:
    """Tests for save_record function."""

    def test_appends_record(self, journal_file):
        record = MaintenanceRecord(
            "2024-06-20",
            106100,
            EventType.UNPLANNED,
            "Brake pads",
            items=[RecordItem("Pads", 3900, item_id="i9")],
            total_cost=3900,
            id="r3",
            car_id="yeti",
        )

        save_record(journal_file, record)

        journal = load_journal(journal_file)
        assert len(journal.records) == 3
        saved = journal.records[-1]
        assert saved.id == "r3"
        assert saved.event_type == EventType.UNPLANNED
        assert saved.items[0].name == "Pads"
        assert saved.total_cost == 3900

    def test_creates_records_list(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("car:\n  make: Lada\n")
        save_record(path, MaintenanceRecord("2024-01-01", 100, EventType.REFUELING))
        assert len(load_journal(path).records) == 1

    def test_preserves_key_order(self, journal_file):
        save_record(journal_file, MaintenanceRecord("2024-01-01", 100))
        with open(journal_file, encoding="utf-8") as fp:
            data = yaml.safe_load(fp)
        assert list(data.keys()) == ["car", "records"]
        assert list(data["records"][-1].keys())[:3] == ["id", "date", "mileageKm"]


class TestUpdateRecord:
    """Tests for update_record function."""

    def test_replaces_record(self, journal_file):
        replacement = MaintenanceRecord(
            "2024-01-16", 100010, EventType.PLANNED, "Service (corrected)", id="r1"
        )
        update_record(journal_file, "r1", replacement)

        journal = load_journal(journal_file)
        assert len(journal.records) == 2
        assert journal.records[0].title == "Service (corrected)"
        assert journal.records[0].mileage_km == 100010

    def test_unknown_id(self, journal_file):
        with pytest.raises(KeyError):
            update_record(journal_file, "nope", MaintenanceRecord("2024-01-01"))


class TestDeleteRecord:
    """Tests for delete_record function."""

    def test_removes_record(self, journal_file):
        delete_record(journal_file, "r1")
        records = load_journal(journal_file).records
        assert [r.id for r in records] == ["r2"]

    def test_unknown_id(self, journal_file):
        with pytest.raises(KeyError):
            delete_record(journal_file, "nope")


# =============================================================================
# Car write tests
# =============================================================================


class TestCarProfileWrites:
    """Tests for save_car_profile and set_custom_interval."""

    def test_save_car_profile_keeps_records(self, journal_file):
        save_car_profile(journal_file, CarProfile("Skoda", "Octavia", "2019", id="yeti"))
        journal = load_journal(journal_file)
        assert journal.car.model == "Octavia"
        assert len(journal.records) == 2

    def test_set_custom_interval(self, journal_file):
        set_custom_interval(journal_file, 10000, 6)
        car = load_journal(journal_file).car
        assert car.custom_interval_km == 10000
        assert car.custom_interval_months == 6

    def test_clear_custom_interval(self, journal_file):
        set_custom_interval(journal_file, 10000, 6)
        set_custom_interval(journal_file, None, None)
        car = load_journal(journal_file).car
        assert car.custom_interval_km is None
        assert car.custom_interval_months is None
        assert car.make == "Skoda"


class TestJournalFiles:
    """Tests for create_journal and delete_journal."""

    def test_create_then_load(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_journal(path, CarProfile("Kia", "Rio", "2020", currency="$"))

        journal = load_journal(path)
        assert journal.car.name == "2020 Kia Rio"
        assert journal.car.currency == "$"
        assert journal.records == []

    def test_delete(self, journal_file):
        delete_journal(journal_file)
        assert not journal_file.exists()
