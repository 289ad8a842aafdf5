"""CarProfile class for vehicle identification."""

from typing import Optional


class CarProfile:
    """Vehicle description plus an optional service interval override."""

    def __init__(
        self,
        make: str,
        model: str = "",
        year: str = "",
        vin: str = "",
        photo_uri: Optional[str] = None,
        currency: str = "₽",
        custom_interval_km: Optional[int] = None,
        custom_interval_months: Optional[int] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.make = make
        self.model = model or ""
        self.year = str(year) if year is not None else ""
        self.vin = vin or ""
        self.photo_uri = photo_uri
        self.currency = currency or "₽"
        self.custom_interval_km = custom_interval_km
        self.custom_interval_months = custom_interval_months

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        parts = [p for p in (self.year, self.make, self.model) if p]
        return " ".join(parts)
