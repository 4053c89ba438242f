"""
Input parsing for operator-entered values.

Every parser returns ``Valid(value)`` or ``Invalid(reason)`` instead of
raising, so the console shell can decide to re-prompt.
"""

import re
from dataclasses import dataclass
from typing import Any, Union

from .calendar_date import CalendarDate
from .exceptions import InvalidFieldError
from .vehicle import FIELD_SEPARATOR, normalize_code, normalize_driver_name


# Input limits for each operator-entered field
VEHICLE_ID_RANGE = (1, 9_999_999)
MILEAGE_RANGE = (0.0, 100_000_000.0)
INTERVAL_KM_RANGE = (1.0, 100_000.0)
INTERVAL_DAYS_RANGE = (0, 5000)
AVG_DAILY_KM_RANGE = (0.0, 100_000.0)
FUEL_EFFICIENCY_RANGE = (0.0, 200.0)
HISTORY_COUNT_RANGE = (0, 1500)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_DATE_RE = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*/\s*(\d+)\s*$")


@dataclass(frozen=True)
class Valid:
    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    reason: str

    @property
    def ok(self) -> bool:
        return False


ParseResult = Union[Valid, Invalid]


def parse_int(text: str, low: int, high: int) -> ParseResult:
    """Parse a whole number within [low, high]."""
    text = text.strip()
    if not _INT_RE.match(text):
        return Invalid("Please enter digits only (no letters or symbols).")
    value = int(text)
    if value < low or value > high:
        return Invalid(f"Value must be between {low} and {high}.")
    return Valid(value)


def parse_float(text: str, low: float, high: float) -> ParseResult:
    """Parse a plain decimal number (no exponent or digit separators)."""
    text = text.strip()
    if not _FLOAT_RE.match(text):
        return Invalid("Please enter a valid number.")
    value = float(text)
    if value < low or value > high:
        return Invalid(f"Value must be between {low:g} and {high:g}.")
    return Valid(value)


def parse_date(text: str) -> ParseResult:
    """Parse a dd/mm/yyyy date (range-checked, month lengths ignored)."""
    match = _DATE_RE.match(text)
    if match:
        day, month, year = (int(g) for g in match.groups())
        date = CalendarDate(day, month, year)
        if date.is_valid:
            return Valid(date)
    return Invalid("Invalid date. Use format dd/mm/yyyy with valid values.")


def parse_code(text: str) -> ParseResult:
    """Parse a vehicle code; normalized to upper case and truncated."""
    if not text.strip():
        return Invalid("Code cannot be empty.")
    if FIELD_SEPARATOR in text:
        return Invalid(f"Code cannot contain '{FIELD_SEPARATOR}'.")
    try:
        return Valid(normalize_code(text))
    except InvalidFieldError:
        return Invalid("Code cannot contain line breaks.")


def parse_driver_name(text: str) -> ParseResult:
    """Parse a driver's full name; must contain at least one non-digit."""
    stripped = text.strip()
    if not stripped:
        return Invalid("Name cannot be empty.")
    if "".join(stripped.split()).isdigit():
        return Invalid("Name cannot be only numbers. Please enter a proper name.")
    if FIELD_SEPARATOR in stripped:
        return Invalid(f"Name cannot contain '{FIELD_SEPARATOR}'.")
    try:
        return Valid(normalize_driver_name(stripped))
    except InvalidFieldError:
        return Invalid("Name cannot contain line breaks.")
