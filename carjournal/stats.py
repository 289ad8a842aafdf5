"""
Spending statistics over maintenance records.

Every function takes the records to aggregate and returns a number or a
small structure. Callers choose the scope: filter by car, period or category
first, and drop FUTURE records (see exclude_future) before asking for costs,
since future plans carry no real spending.
"""

from dataclasses import asdict, dataclass
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Any, Dict, List, Optional, Sequence

from .event_type import EventType
from .record import MaintenanceRecord
from .calculations import month_span, months_back, round_half_up

# Accepted length of a monthly breakdown window
MIN_MONTHS = 1
MAX_MONTHS = 120


@dataclass
class MonthlyTotal:
    """Spending in one calendar month."""

    month: str  # Display label, e.g. "Mar 25"
    total: float
    key: str = ""  # YYYY-MM

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyTypeTotal:
    """Spending in one calendar month, split by event type."""

    month: str
    key: str
    planned: float = 0
    unplanned: float = 0
    refueling: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class YearlyTotal:
    year: str
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def exclude_future(records: Sequence[MaintenanceRecord]) -> List[MaintenanceRecord]:
    """Drop future plans, keeping records that represent real spending."""
    return [r for r in records if r.event_type != EventType.FUTURE]


def total_spent(records: Sequence[MaintenanceRecord]) -> float:
    """Sum of stored total_cost, unrounded."""
    return sum(r.total_cost for r in records)


def category_total(
    records: Sequence[MaintenanceRecord], event_type: EventType
) -> float:
    return total_spent([r for r in records if r.event_type == event_type])


def planned_total(records: Sequence[MaintenanceRecord]) -> float:
    return category_total(records, EventType.PLANNED)


def unplanned_total(records: Sequence[MaintenanceRecord]) -> float:
    return category_total(records, EventType.UNPLANNED)


def refueling_total(records: Sequence[MaintenanceRecord]) -> float:
    return category_total(records, EventType.REFUELING)


def record_count(records: Sequence[MaintenanceRecord]) -> int:
    return len(records)


def planned_share(records: Sequence[MaintenanceRecord]) -> int:
    """Planned spending as a whole percentage of planned + unplanned, 0 if none."""
    planned = planned_total(records)
    combined = planned + unplanned_total(records)
    if combined <= 0:
        return 0
    return round_half_up(planned / combined * 100)


def _in_month(record: MaintenanceRecord, month_start: date) -> bool:
    d = record.parsed_date
    return d is not None and d.year == month_start.year and d.month == month_start.month


def _trailing_months(months: int, today: Optional[date]) -> List[date]:
    """First days of the trailing window, oldest first, ending at today's month."""
    today = today or date.today()
    return [months_back(today, i) for i in range(months - 1, -1, -1)]


def monthly_totals(
    records: Sequence[MaintenanceRecord],
    months: int = 12,
    today: Optional[date] = None,
) -> List[MonthlyTotal]:
    """
    Spending per calendar month over a trailing window.

    Returns `months` buckets, oldest first, the last one being the current
    month. Records dated outside the window (or undated) match no bucket.
    """
    result = []
    for start in _trailing_months(months, today):
        total = sum(r.total_cost for r in records if _in_month(r, start))
        result.append(
            MonthlyTotal(
                month=start.strftime("%b %y"),
                total=total,
                key=start.strftime("%Y-%m"),
            )
        )
    return result


def monthly_totals_by_type(
    records: Sequence[MaintenanceRecord],
    months: int = 12,
    today: Optional[date] = None,
) -> List[MonthlyTypeTotal]:
    """Like monthly_totals, with each bucket split into planned/unplanned/refueling."""
    result = []
    for start in _trailing_months(months, today):
        in_month = [r for r in records if _in_month(r, start)]
        result.append(
            MonthlyTypeTotal(
                month=start.strftime("%b %y"),
                key=start.strftime("%Y-%m"),
                planned=planned_total(in_month),
                unplanned=unplanned_total(in_month),
                refueling=refueling_total(in_month),
            )
        )
    return result


def yearly_totals(records: Sequence[MaintenanceRecord]) -> List[YearlyTotal]:
    """Spending per calendar year, ascending. Undated records are skipped."""
    by_year: Dict[str, float] = {}
    for r in records:
        d = r.parsed_date
        if d is None:
            continue
        year = f"{d.year:04d}"
        by_year[year] = by_year.get(year, 0) + r.total_cost
    return [YearlyTotal(year, total) for year, total in sorted(by_year.items())]


def _dates(records: Sequence[MaintenanceRecord]) -> List[date]:
    return [r.parsed_date for r in records if r.is_dated]


def avg_per_month(records: Sequence[MaintenanceRecord]) -> int:
    """
    Average monthly spending over the observed span.

    The span is the inclusive month count from the earliest to the latest
    record date, so records all within one month divide by 1.
    """
    if not records:
        return 0
    dates = _dates(records)
    span = month_span(min(dates), max(dates)) if dates else 1
    return round_half_up(total_spent(records) / span)


def avg_per_year(records: Sequence[MaintenanceRecord]) -> int:
    """
    Average yearly spending.

    - Span of 12 months or less: the whole total counts as one year
    - Longer spans: split into consecutive 12-month windows starting at the
      earliest record date, and average the sums of the full windows.
      A partial trailing window is left out.
    """
    if not records:
        return 0
    dates = _dates(records)
    if not dates:
        return round_half_up(total_spent(records))

    first = min(dates)
    span = month_span(first, max(dates))
    if span <= 12:
        return round_half_up(total_spent(records))

    window_totals = []
    for year in range(span // 12):
        start = first + relativedelta(months=12 * year)
        end = first + relativedelta(months=12 * (year + 1))
        window_totals.append(
            sum(
                r.total_cost
                for r in records
                if r.is_dated and start <= r.parsed_date < end
            )
        )
    return round_half_up(sum(window_totals) / len(window_totals))


def cost_per_distance(records: Sequence[MaintenanceRecord]) -> Optional[float]:
    """
    Spending per km driven, to 2 decimals.

    None with fewer than 2 records or when the records don't span any distance.
    """
    if len(records) < 2:
        return None
    mileages = sorted(r.mileage_km for r in records)
    diff = mileages[-1] - mileages[0]
    if diff <= 0:
        return None
    return round_half_up(total_spent(records) / diff, 2)


def spending_summary(
    records: Sequence[MaintenanceRecord],
    months: int = 6,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Dashboard figures for the given records, future plans excluded."""
    spending = exclude_future(records)
    return {
        "recordCount": record_count(spending),
        "totalSpent": total_spent(spending),
        "avgPerMonth": avg_per_month(spending),
        "avgPerYear": avg_per_year(spending),
        "plannedTotal": planned_total(spending),
        "unplannedTotal": unplanned_total(spending),
        "refuelingTotal": refueling_total(spending),
        "plannedShare": planned_share(spending),
        "costPerKm": cost_per_distance(spending),
        "monthly": [m.to_dict() for m in monthly_totals(spending, months, today)],
        "yearly": [y.to_dict() for y in yearly_totals(spending)],
    }
