"""
Car maintenance journal models.

This package provides data models and calculations for a car journal:
- EventType: Record categories (PLANNED, UNPLANNED, REFUELING, FUTURE)
- CarProfile: Vehicle identification and interval override
- MaintenanceRecord / RecordItem: Logged events and their line items
- Service interval catalog and resolver
- NextServiceInfo: Predicted next planned service
- Spending statistics (stats module)
- Journal: Main aggregate combining a car and its records
"""

from .event_type import EventType
from .car import CarProfile
from .record import MaintenanceRecord, RecordItem, generate_id, records_for_car
from .catalog import (
    DEFAULT_INTERVAL_KM,
    DEFAULT_INTERVAL_MONTHS,
    SERVICE_INTERVALS,
    ServiceIntervalEntry,
    interval_for_make,
)
from .intervals import ResolvedInterval, resolve_interval
from .service_due import NextServiceInfo
from .next_service import calc_next_service, current_mileage, last_planned_record
from .calculations import (
    calc_due_km,
    calc_due_date,
    days_until,
    month_span,
    parse_iso_date,
)
from .stats import (
    MAX_MONTHS,
    MIN_MONTHS,
    MonthlyTotal,
    MonthlyTypeTotal,
    YearlyTotal,
    avg_per_month,
    avg_per_year,
    category_total,
    cost_per_distance,
    exclude_future,
    monthly_totals,
    monthly_totals_by_type,
    planned_share,
    planned_total,
    record_count,
    refueling_total,
    spending_summary,
    total_spent,
    unplanned_total,
    yearly_totals,
)
from .journal import Journal
from .loader import (
    load_journal,
    save_record,
    update_record,
    delete_record,
    save_car_profile,
    set_custom_interval,
    create_journal,
    delete_journal,
)

__all__ = [
    "EventType",
    "CarProfile",
    "MaintenanceRecord",
    "RecordItem",
    "generate_id",
    "records_for_car",
    "DEFAULT_INTERVAL_KM",
    "DEFAULT_INTERVAL_MONTHS",
    "SERVICE_INTERVALS",
    "ServiceIntervalEntry",
    "interval_for_make",
    "ResolvedInterval",
    "resolve_interval",
    "NextServiceInfo",
    "calc_next_service",
    "current_mileage",
    "last_planned_record",
    "calc_due_km",
    "calc_due_date",
    "days_until",
    "month_span",
    "parse_iso_date",
    "MAX_MONTHS",
    "MIN_MONTHS",
    "MonthlyTotal",
    "MonthlyTypeTotal",
    "YearlyTotal",
    "avg_per_month",
    "avg_per_year",
    "category_total",
    "cost_per_distance",
    "exclude_future",
    "monthly_totals",
    "monthly_totals_by_type",
    "planned_share",
    "planned_total",
    "record_count",
    "refueling_total",
    "spending_summary",
    "total_spent",
    "unplanned_total",
    "yearly_totals",
    "Journal",
    "load_journal",
    "save_record",
    "update_record",
    "delete_record",
    "save_car_profile",
    "set_custom_interval",
    "create_journal",
    "delete_journal",
]
