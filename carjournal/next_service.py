"""Prediction of the next planned service from the record history."""

from datetime import date
from typing import Optional, Sequence

from .car import CarProfile
from .event_type import EventType
from .record import MaintenanceRecord
from .service_due import NextServiceInfo
from .intervals import resolve_interval
from .calculations import calc_due_km, calc_due_date, days_until


def last_planned_record(
    records: Sequence[MaintenanceRecord],
) -> Optional[MaintenanceRecord]:
    """Most recent dated planned record. On equal dates the earliest in input wins."""
    planned = [
        r for r in records if r.event_type == EventType.PLANNED and r.is_dated
    ]
    if not planned:
        return None
    return max(planned, key=lambda r: r.parsed_date)


def current_mileage(records: Sequence[MaintenanceRecord]) -> Optional[int]:
    """Odometer reading of the most recent dated record of any type."""
    dated = [r for r in records if r.is_dated]
    if not dated:
        return None
    return max(dated, key=lambda r: r.parsed_date).mileage_km


def calc_next_service(
    records: Sequence[MaintenanceRecord],
    car: CarProfile,
    today: Optional[date] = None,
) -> Optional[NextServiceInfo]:
    """
    Predict when the next planned service is due.

    Logic:
    - Last planned service is the reference point (None if there is none)
    - Due at last mileage + interval km, and last date + interval months
    - Current mileage comes from the latest record of any type
    - Overdue when either days or km remaining has gone negative
    """
    last = last_planned_record(records)
    if last is None:
        return None

    today = today or date.today()
    interval = resolve_interval(car)

    by_mileage_km = calc_due_km(last.mileage_km, interval.interval_km)
    by_date = calc_due_date(last.parsed_date, interval.interval_months)
    days_left = days_until(by_date, today)

    mileage_now = current_mileage(records)
    if mileage_now is None:
        mileage_now = last.mileage_km
    km_left = by_mileage_km - mileage_now

    return NextServiceInfo(
        by_mileage_km=by_mileage_km,
        by_date=by_date.isoformat(),
        days_left=days_left,
        km_left=km_left,
        overdue=days_left < 0 or km_left < 0,
        current_mileage_km=mileage_now,
        last_service=last,
        interval=interval,
    )
