"""Helper functions for maintenance status calculations."""

import math
from typing import Optional

from .calendar_date import CalendarDate
from .status import Status

DUE_SOON_KM = 500
MAX_WEAR_RATIO = 1.5
FALLBACK_HEALTH_SCORE = 50


def calc_due_mileage(last_service_mileage: float, interval_km: float) -> float:
    """Mileage at which the next service is due."""
    return last_service_mileage + interval_km


def check_mileage_status(
    current: float, due: float, soon_threshold: float = DUE_SOON_KM
) -> Status:
    """
    Determine the mileage-only status band.

    - OVERDUE once the due mileage is reached
    - DUE_SOON when no more than ``soon_threshold`` km remain
    """
    if current >= due:
        return Status.OVERDUE
    if due - current <= soon_threshold:
        return Status.DUE_SOON
    return Status.OK


def calc_next_due_date(
    last_service: CalendarDate, interval_days: int
) -> Optional[CalendarDate]:
    """Last service date shifted by the interval, or None when days are not tracked."""
    if interval_days <= 0 or not last_service.is_valid:
        return None
    return last_service.add_days(interval_days)


def check_date_overdue(
    last_service: CalendarDate, reference: CalendarDate, interval_days: int
) -> bool:
    """True when at least ``interval_days`` day-counts have passed since service."""
    if interval_days <= 0:
        return False
    if not (last_service.is_valid and reference.is_valid):
        return False
    return last_service.days_until(reference) >= interval_days


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calc_health_score(
    current: float, last_service_mileage: float, interval_km: float
) -> int:
    """
    Score 0-100, linear in distance driven since the last service.

    100 right after service, 0 at 150% of the interval. Independent of the
    status band.
    """
    if interval_km <= 0:
        return FALLBACK_HEALTH_SCORE
    ratio = (current - last_service_mileage) / interval_km
    ratio = min(max(ratio, 0.0), MAX_WEAR_RATIO)
    score = (MAX_WEAR_RATIO - ratio) / MAX_WEAR_RATIO * 100
    return min(max(round_half_up(score), 0), 100)
