"""Helper functions for service due and spending calculations."""

import math
import re
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Union

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_iso_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Only the extended calendar form is accepted; compact (20250310) and week
    (2025-W11-1) forms raise ValueError like any other malformed date.
    """
    if not isinstance(value, str) or not ISO_DATE_RE.fullmatch(value):
        raise ValueError(f"Invalid date '{value}' (expected YYYY-MM-DD)")
    return date.fromisoformat(value)


def calc_due_km(last_km: int, interval_km: int) -> int:
    """Next due odometer reading: last service + interval."""
    return (last_km or 0) + interval_km


def calc_due_date(last_date: date, interval_months: int) -> date:
    """
    Calculate next due date: last + interval calendar months.

    Days past the end of the target month are clamped to its last day,
    so 2024-01-31 + 1 month is 2024-02-29.
    """
    return last_date + relativedelta(months=int(interval_months))


def days_until(target: date, today: date) -> int:
    """Whole days from today until target, negative once target has passed."""
    return (target - today).days


def month_span(first: date, last: date) -> int:
    """Inclusive number of calendar months between two dates, at least 1."""
    months = (last.year - first.year) * 12 + (last.month - first.month) + 1
    return max(months, 1)


def months_back(today: date, months: int) -> date:
    """First day of the month `months` before today's month."""
    return date(today.year, today.month, 1) - relativedelta(months=months)


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """Round halves upward (2.5 -> 3, -2.5 -> -2), unlike Python's round()."""
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
