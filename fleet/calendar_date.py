"""
Approximate calendar dates.

All elapsed-time arithmetic uses a fixed 30-day month and 365-day year.
Converting a day count back to a date is not an exact inverse of the
projection: months and days that come out as 0 are bumped to 1, so a shifted
date can land slightly earlier or later than a true calendar would put it.
Existing data files rely on this arithmetic, so it is kept as is.
"""

from dataclasses import dataclass

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class CalendarDate:
    """A day/month/year triple. ``CalendarDate()`` is the absent date."""

    day: int = 0
    month: int = 0
    year: int = 0

    @classmethod
    def from_day_count(cls, total: int) -> "CalendarDate":
        year = total // DAYS_PER_YEAR
        rem = total % DAYS_PER_YEAR
        month = rem // DAYS_PER_MONTH or 1
        day = rem % DAYS_PER_MONTH or 1
        return cls(day, month, year)

    @property
    def is_valid(self) -> bool:
        """Range check only; month lengths and leap years are not considered."""
        return self.year > 0 and 1 <= self.month <= 12 and 1 <= self.day <= 31

    @property
    def is_set(self) -> bool:
        return self.year > 0

    def day_count(self) -> int:
        return self.year * DAYS_PER_YEAR + self.month * DAYS_PER_MONTH + self.day

    def add_days(self, days: int) -> "CalendarDate":
        return CalendarDate.from_day_count(self.day_count() + days)

    def days_until(self, other: "CalendarDate") -> int:
        """Day-count difference ``other - self``."""
        return other.day_count() - self.day_count()

    def format(self, absent: str = "-") -> str:
        """Render as dd-mm-yyyy, or ``absent`` when the date is not set."""
        if not self.is_set:
            return absent
        return f"{self.day:02d}-{self.month:02d}-{self.year:04d}"

    def __str__(self) -> str:
        return self.format()
