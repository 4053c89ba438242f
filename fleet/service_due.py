"""ServiceDue dataclass for a vehicle's evaluated maintenance state."""

from dataclasses import dataclass
from typing import Optional

from .calendar_date import CalendarDate
from .status import Status


@dataclass
class ServiceDue:
    """Derived maintenance fields for one vehicle at a reference date."""

    status: Status
    km_left: float
    health_score: int
    due_mileage: float
    next_due: Optional[CalendarDate] = None
    days_since_service: Optional[int] = None

    @property
    def is_due(self) -> bool:
        return self.status.is_due
