"""Status enum for maintenance urgency bands."""

from enum import Enum


class Status(Enum):
    """Maintenance status bands. The value is what the data file stores."""

    OK = 0
    DUE_SOON = 1
    OVERDUE = 2

    @property
    def label(self) -> str:
        """Display label, also used in the CSV report."""
        return self.name.replace("_", " ")

    @property
    def is_due(self) -> bool:
        return self is not Status.OK
