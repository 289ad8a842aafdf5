"""MaintenanceRecord and RecordItem classes for journal entries."""

import uuid
from datetime import date
from typing import Iterable, List, Optional, Union

from .event_type import EventType
from .calculations import parse_iso_date


def generate_id() -> str:
    """Generate an opaque unique identifier for records and items."""
    return uuid.uuid4().hex


class RecordItem:
    """A single line item (part, labour, fuel) within a record."""

    def __init__(self, name: str, cost: float = 0, item_id: Optional[str] = None):
        self.item_id = item_id or generate_id()
        self.name = name
        self.cost = cost


class MaintenanceRecord:
    """A logged maintenance event, repair, refueling or future plan."""

    def __init__(
        self,
        date: str,
        mileage_km: int = 0,
        event_type: Union[EventType, str] = EventType.PLANNED,
        title: str = "",
        items: Optional[List[RecordItem]] = None,
        total_cost: float = 0,
        currency: str = "₽",
        id: Optional[str] = None,
        car_id: Optional[str] = None,
    ):
        self.id = id or generate_id()
        self.date = date or ""
        self.mileage_km = mileage_km or 0
        self.event_type = EventType(event_type)
        self.title = title
        self.items = items or []
        self.total_cost = total_cost or 0
        self.currency = currency
        self.car_id = car_id

    @property
    def is_dated(self) -> bool:
        return bool(self.date)

    @property
    def parsed_date(self) -> Optional[date]:
        """Record date as a date object, None for undated (future) records."""
        if not self.date:
            return None
        return parse_iso_date(self.date)

    @property
    def items_total(self) -> float:
        """Sum of item costs. total_cost is what was stored at save time."""
        return sum(item.cost for item in self.items)


def records_for_car(
    records: Iterable[MaintenanceRecord], car_id: Optional[str]
) -> List[MaintenanceRecord]:
    """Records belonging to a car. Records without a car_id belong to any car."""
    return [r for r in records if car_id is None or r.car_id in (None, car_id)]
