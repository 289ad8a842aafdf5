"""NextServiceInfo dataclass for the predicted next planned service."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .intervals import ResolvedInterval
    from .record import MaintenanceRecord


@dataclass
class NextServiceInfo:
    """When the next planned service is due, by distance and by date."""

    by_mileage_km: int
    by_date: str
    days_left: Optional[int]
    km_left: Optional[int]
    overdue: bool
    current_mileage_km: Optional[int] = None
    last_service: Optional["MaintenanceRecord"] = None
    interval: Optional["ResolvedInterval"] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "byMileageKm": self.by_mileage_km,
            "byDate": self.by_date,
            "daysLeft": self.days_left,
            "kmLeft": self.km_left,
            "overdue": self.overdue,
            "currentMileageKm": self.current_mileage_km,
        }
        if self.last_service is not None:
            d["lastServiceId"] = self.last_service.id
            d["lastServiceDate"] = self.last_service.date
        if self.interval is not None:
            d["intervalKm"] = self.interval.interval_km
            d["intervalMonths"] = self.interval.interval_months
            d["isCustom"] = self.interval.is_custom
        return d
