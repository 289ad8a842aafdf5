"""Journal class - a car together with its maintenance records."""

from datetime import date
from typing import List, Optional, Union

from .car import CarProfile
from .event_type import EventType
from .record import MaintenanceRecord, records_for_car
from .intervals import ResolvedInterval, resolve_interval
from .next_service import calc_next_service, current_mileage
from .service_due import NextServiceInfo
from .stats import exclude_future
from .calculations import parse_iso_date


class Journal:
    """A car profile with its records, plus the views the screens need."""

    def __init__(
        self,
        car: CarProfile,
        records: Optional[List[MaintenanceRecord]] = None,
    ):
        self.car = car
        self.records = records or []

    @property
    def car_records(self) -> List[MaintenanceRecord]:
        """Records belonging to this car."""
        return records_for_car(self.records, self.car.id)

    @property
    def spending_records(self) -> List[MaintenanceRecord]:
        """Car records that represent real spending (future plans excluded)."""
        return exclude_future(self.car_records)

    @property
    def interval(self) -> ResolvedInterval:
        return resolve_interval(self.car)

    @property
    def last_record(self) -> Optional[MaintenanceRecord]:
        """Most recent dated record, future plans excluded."""
        dated = [r for r in self.spending_records if r.is_dated]
        if not dated:
            return None
        return max(dated, key=lambda r: r.parsed_date)

    @property
    def current_mileage(self) -> Optional[int]:
        return current_mileage(self.car_records)

    def get_record(self, record_id: str) -> Optional[MaintenanceRecord]:
        """Find a record by id."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def get_records_sorted(self, reverse: bool = True) -> List[MaintenanceRecord]:
        """
        Car records ordered for the journal list.

        Dated records by date (newest first unless reverse=False),
        future plans always last in their original order.
        """
        records = self.car_records
        dated = [r for r in records if r.event_type != EventType.FUTURE and r.is_dated]
        rest = [r for r in records if r not in dated]
        dated.sort(key=lambda r: r.parsed_date, reverse=reverse)
        return dated + rest

    def filter_records(
        self,
        event_type: Optional[Union[EventType, str]] = None,
        search: Optional[str] = None,
        since: Optional[str] = None,
        reverse: bool = True,
    ) -> List[MaintenanceRecord]:
        """
        Sorted records narrowed by type, text and start date.

        Args:
            event_type: Only records of this type
            search: Case-insensitive match on title or any item name
            since: Only records dated on or after this YYYY-MM-DD date
        """
        records = self.get_records_sorted(reverse=reverse)

        if event_type is not None:
            wanted = EventType(event_type)
            records = [r for r in records if r.event_type == wanted]

        if search and search.strip():
            query = search.strip().lower()
            records = [
                r
                for r in records
                if query in r.title.lower()
                or any(query in item.name.lower() for item in r.items)
            ]

        if since:
            since_date = parse_iso_date(since)
            records = [r for r in records if r.is_dated and r.parsed_date >= since_date]

        return records

    def next_service(self, today: Optional[date] = None) -> Optional[NextServiceInfo]:
        """Predict the next planned service for this car."""
        return calc_next_service(self.car_records, self.car, today)
