"""Effective service interval for a car."""

from dataclasses import dataclass

from .car import CarProfile
from .catalog import DEFAULT_INTERVAL_KM, DEFAULT_INTERVAL_MONTHS, interval_for_make


@dataclass(frozen=True)
class ResolvedInterval:
    """Distance/time interval in effect for a car."""

    interval_km: int
    interval_months: int
    is_custom: bool = False


def resolve_interval(car: CarProfile) -> ResolvedInterval:
    """
    Pick the interval for a car.

    - Custom override, only when both km and months are positive
    - Catalog entry for the car's make
    - Global default (15000 km / 12 months)
    """
    km = car.custom_interval_km
    months = car.custom_interval_months
    if km and km > 0 and months and months > 0:
        return ResolvedInterval(km, months, is_custom=True)

    entry = interval_for_make(car.make)
    if entry is not None:
        return ResolvedInterval(entry.interval_km, entry.interval_months)

    return ResolvedInterval(DEFAULT_INTERVAL_KM, DEFAULT_INTERVAL_MONTHS)
