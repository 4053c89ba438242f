"""
Fleet maintenance tracking models.

This package provides the core of the fleet tracker:
- Status: Maintenance bands (OK, DUE_SOON, OVERDUE)
- CalendarDate: Approximate 30-day-month dates
- Vehicle: One fleet record and its status evaluation
- ServiceDue: Evaluated maintenance state
- Fleet: Ordered record store with unique numbers and codes
- load_fleet / save_fleet / export_report: Data file and CSV report
"""

from .status import Status
from .calendar_date import CalendarDate
from .service_due import ServiceDue
from .vehicle import Vehicle
from .store import Fleet
from .calculations import (
    DUE_SOON_KM,
    calc_due_mileage,
    calc_health_score,
    calc_next_due_date,
    check_date_overdue,
    check_mileage_status,
)
from .exceptions import (
    FleetError,
    DuplicateKeyError,
    DuplicateCodeError,
    DuplicateIdError,
    VehicleNotFoundError,
    PositionError,
    StoreIOError,
    ConfigError,
    InvalidFieldError,
)
from .loader import load_fleet, save_fleet, export_report

__all__ = [
    "Status",
    "CalendarDate",
    "ServiceDue",
    "Vehicle",
    "Fleet",
    "DUE_SOON_KM",
    "calc_due_mileage",
    "calc_health_score",
    "calc_next_due_date",
    "check_date_overdue",
    "check_mileage_status",
    "FleetError",
    "DuplicateKeyError",
    "DuplicateCodeError",
    "DuplicateIdError",
    "VehicleNotFoundError",
    "PositionError",
    "StoreIOError",
    "ConfigError",
    "InvalidFieldError",
    "load_fleet",
    "save_fleet",
    "export_report",
]
