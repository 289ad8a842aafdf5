"""EventType enum for maintenance record categories."""

from enum import Enum


class EventType(Enum):
    """Kind of journal entry. Only dated, costed kinds take part in spending stats."""

    PLANNED = "planned"
    UNPLANNED = "unplanned"
    REFUELING = "refueling"
    FUTURE = "future"  # Not yet incurred: no date, mileage or real cost

    @property
    def label(self) -> str:
        return self.value.capitalize()
