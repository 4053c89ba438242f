"""Vehicle class - one fleet record with its maintenance state."""

import logging
from dataclasses import dataclass, field

from .calculations import (
    calc_due_mileage,
    calc_health_score,
    calc_next_due_date,
    check_date_overdue,
    check_mileage_status,
)
from .calendar_date import CalendarDate
from .exceptions import InvalidFieldError
from .service_due import ServiceDue
from .status import Status

logger = logging.getLogger(__name__)

CODE_MAX_LEN = 19
DRIVER_NAME_MAX_LEN = 49

# Data file field separator; text fields may not contain it or line breaks
FIELD_SEPARATOR = "|"


def check_text_field(field_name: str, text: str) -> str:
    """Raise InvalidFieldError if ``text`` could not be stored on one data line."""
    # str.splitlines() boundaries, since that is how the data file is read back
    if FIELD_SEPARATOR in text or "".join(text.splitlines()) != text:
        raise InvalidFieldError(field_name, text)
    return text


def normalize_code(code: str) -> str:
    """Upper-case and truncate a vehicle code to CODE_MAX_LEN characters."""
    return check_text_field("code", code.strip().upper()[:CODE_MAX_LEN])


def normalize_driver_name(name: str) -> str:
    """Truncate a driver name to DRIVER_NAME_MAX_LEN characters."""
    return check_text_field("driver name", name.strip()[:DRIVER_NAME_MAX_LEN])


@dataclass
class Vehicle:
    """
    A fleet vehicle and its service data.

    ``status``, ``km_left``, ``health_score`` and ``next_due`` are derived;
    call ``evaluate_status`` before reading them. ``avg_daily_km`` and
    ``fuel_efficiency`` are informational and never affect the status.
    """

    code: str
    driver_name: str
    vehicle_id: int
    last_service: CalendarDate
    current_mileage: float
    last_service_mileage: float
    service_interval_km: float
    service_interval_days: int = 0
    service_history_count: int = 0
    avg_daily_km: float = 0.0
    fuel_efficiency: float = 0.0
    next_due: CalendarDate = field(default_factory=CalendarDate)
    status: Status = Status.OK
    km_left: float = 0.0
    health_score: int = 100

    def __post_init__(self):
        self.code = normalize_code(self.code)
        self.driver_name = normalize_driver_name(self.driver_name)

    @property
    def name(self) -> str:
        """Short display name, e.g. 'Bus 12 [CHD-101A]'."""
        return f"Bus {self.vehicle_id} [{self.code}]"

    @property
    def due_mileage(self) -> float:
        return calc_due_mileage(self.last_service_mileage, self.service_interval_km)

    def reset_status(self) -> None:
        """Put derived fields back to their freshly-added values."""
        self.next_due = CalendarDate()
        self.km_left = 0.0
        self.status = Status.OK
        self.health_score = 100

    def evaluate_status(self, reference: CalendarDate) -> ServiceDue:
        """
        Recompute the derived fields relative to ``reference``.

        Logic:
        - Overdue when current mileage reaches last service + interval
        - Due soon when within DUE_SOON_KM of the due mileage
        - With a day interval, also overdue once that many days have passed
          (whichever comes first); next_due is set only in that case
        - Health score depends on mileage alone

        The results are written back to this record and also returned.
        """
        due_mileage = self.due_mileage
        self.km_left = due_mileage - self.current_mileage
        status = check_mileage_status(self.current_mileage, due_mileage)

        next_due = calc_next_due_date(self.last_service, self.service_interval_days)
        days_since = None
        if next_due is not None and reference.is_valid:
            days_since = self.last_service.days_until(reference)
            if check_date_overdue(
                self.last_service, reference, self.service_interval_days
            ):
                status = Status.OVERDUE
            self.next_due = next_due
        else:
            next_due = None
            self.next_due = CalendarDate()

        self.status = status
        self.health_score = calc_health_score(
            self.current_mileage, self.last_service_mileage, self.service_interval_km
        )
        logger.debug(
            "%s: %s, %.1f km left, health %d",
            self.name,
            self.status.name,
            self.km_left,
            self.health_score,
        )
        return ServiceDue(
            status=self.status,
            km_left=self.km_left,
            health_score=self.health_score,
            due_mileage=due_mileage,
            next_due=next_due,
            days_since_service=days_since,
        )
