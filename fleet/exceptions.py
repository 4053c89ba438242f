"""
Exception classes for fleet operations.

Each carries a human-readable ``message`` that the console shell prints
as-is. None of them is fatal to an interactive session.
"""


class FleetError(Exception):
    """Base class for all fleet errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class DuplicateKeyError(FleetError):
    """Raised when an add or edit would break id or code uniqueness."""


class DuplicateCodeError(DuplicateKeyError):
    """Raised when a code already exists (case-insensitive)."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Vehicle code '{code}' already exists (case-insensitive)")


class DuplicateIdError(DuplicateKeyError):
    """Raised when a vehicle number already exists."""

    def __init__(self, vehicle_id: int) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle number {vehicle_id} already exists")


class VehicleNotFoundError(FleetError):
    """Raised when a vehicle number cannot be found in the fleet."""

    def __init__(self, vehicle_id: int) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id} not found")


class PositionError(FleetError):
    """Raised when a 1-based list position is out of range."""

    def __init__(self, position: int, count: int) -> None:
        self.position = position
        self.count = count
        if count:
            message = f"Position {position} out of range (1..{count})"
        else:
            message = "No vehicles available to select"
        super().__init__(message)


class StoreIOError(FleetError):
    """Raised when the data file or report cannot be read or written."""

    def __init__(self, message: str, path=None) -> None:
        self.path = path
        super().__init__(message)


class ConfigError(FleetError):
    """Raised when the configuration file is unreadable or invalid."""


class InvalidFieldError(FleetError):
    """Raised when a text field holds a character the data file cannot store."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field} {value!r}: '|' and line breaks are not allowed"
        )
