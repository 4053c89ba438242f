"""Fleet class - the ordered record store of vehicles."""

import logging
from typing import Iterator, List, Optional, Tuple

from .calendar_date import CalendarDate
from .exceptions import (
    DuplicateCodeError,
    DuplicateIdError,
    PositionError,
    VehicleNotFoundError,
)
from .status import Status
from .vehicle import Vehicle, normalize_code, normalize_driver_name

logger = logging.getLogger(__name__)


class Fleet:
    """
    Ordered collection of vehicles.

    Vehicle numbers and codes are unique; codes compare case-insensitively.
    Insertion order is kept, including across deletions.
    """

    def __init__(self, vehicles: Optional[List[Vehicle]] = None):
        self.vehicles: List[Vehicle] = []
        for vehicle in vehicles or []:
            self.add(vehicle, reset_status=False)

    def __len__(self) -> int:
        return len(self.vehicles)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self.vehicles)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def index_of(self, vehicle_id: int) -> int:
        """0-based index of a vehicle number, or -1."""
        for i, vehicle in enumerate(self.vehicles):
            if vehicle.vehicle_id == vehicle_id:
                return i
        return -1

    def find_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Find a vehicle by its number."""
        index = self.index_of(vehicle_id)
        return self.vehicles[index] if index >= 0 else None

    def get(self, vehicle_id: int) -> Vehicle:
        """Like find_by_id, but raises VehicleNotFoundError."""
        vehicle = self.find_by_id(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)
        return vehicle

    def at_position(self, position: int) -> Vehicle:
        """Vehicle at a 1-based list position."""
        if position < 1 or position > len(self.vehicles):
            raise PositionError(position, len(self.vehicles))
        return self.vehicles[position - 1]

    def code_exists(self, code: str, exclude_index: int = -1) -> bool:
        """Check for a code (case-insensitive), skipping one index when editing."""
        wanted = code.strip().casefold()
        return any(
            i != exclude_index and v.code.casefold() == wanted
            for i, v in enumerate(self.vehicles)
        )

    def id_exists(self, vehicle_id: int, exclude_index: int = -1) -> bool:
        """Check for a vehicle number, skipping one index when editing."""
        return any(
            i != exclude_index and v.vehicle_id == vehicle_id
            for i, v in enumerate(self.vehicles)
        )

    def positions(self) -> List[Tuple[int, int, str, str]]:
        """(position, number, code, driver) rows for choosing a vehicle."""
        return [
            (i + 1, v.vehicle_id, v.code, v.driver_name)
            for i, v in enumerate(self.vehicles)
        ]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, vehicle: Vehicle, reset_status: bool = True) -> Vehicle:
        """
        Append a vehicle to the end of the fleet.

        Raises DuplicateCodeError or DuplicateIdError (code is checked first).
        Derived fields start as OK / 100 with no next-due date unless
        ``reset_status`` is False (records read back from the data file).
        """
        if self.code_exists(vehicle.code):
            raise DuplicateCodeError(vehicle.code)
        if self.id_exists(vehicle.vehicle_id):
            raise DuplicateIdError(vehicle.vehicle_id)
        if reset_status:
            vehicle.reset_status()
        self.vehicles.append(vehicle)
        logger.info("Added %s (%d in fleet)", vehicle.name, len(self.vehicles))
        return vehicle

    def edit_at(
        self,
        position: int,
        *,
        code: Optional[str] = None,
        vehicle_id: Optional[int] = None,
        driver_name: Optional[str] = None,
        last_service: Optional[CalendarDate] = None,
        last_service_mileage: Optional[float] = None,
        current_mileage: Optional[float] = None,
        service_interval_km: Optional[float] = None,
        service_interval_days: Optional[int] = None,
        avg_daily_km: Optional[float] = None,
        fuel_efficiency: Optional[float] = None,
        service_history_count: Optional[int] = None,
    ) -> Vehicle:
        """
        Replace the fields of the vehicle at a 1-based position.

        A None (or empty) code keeps the current code; any other None keeps
        that field too. Uniqueness checks ignore the vehicle being edited.
        Nothing is changed unless every check passes.
        """
        vehicle = self.at_position(position)
        index = position - 1

        new_code = normalize_code(code) if code and code.strip() else vehicle.code
        if self.code_exists(new_code, exclude_index=index):
            raise DuplicateCodeError(new_code)
        if vehicle_id is not None and self.id_exists(vehicle_id, exclude_index=index):
            raise DuplicateIdError(vehicle_id)

        updates = {
            "code": new_code,
            "vehicle_id": vehicle_id,
            "driver_name": normalize_driver_name(driver_name) if driver_name else None,
            "last_service": last_service,
            "last_service_mileage": last_service_mileage,
            "current_mileage": current_mileage,
            "service_interval_km": service_interval_km,
            "service_interval_days": service_interval_days,
            "avg_daily_km": avg_daily_km,
            "fuel_efficiency": fuel_efficiency,
            "service_history_count": service_history_count,
        }
        for attr, value in updates.items():
            if value is not None:
                setattr(vehicle, attr, value)

        logger.info("Edited position %d (%s)", position, vehicle.name)
        return vehicle

    def delete_by_id(self, vehicle_id: int) -> Vehicle:
        """Remove a vehicle, keeping the order of the rest."""
        index = self.index_of(vehicle_id)
        if index < 0:
            raise VehicleNotFoundError(vehicle_id)
        removed = self.vehicles.pop(index)
        logger.info("Deleted %s (%d remaining)", removed.name, len(self.vehicles))
        return removed

    def update_mileage(self, vehicle_id: int, mileage: float) -> float:
        """
        Set the current mileage of a vehicle and return the previous value.

        A lower reading than before is accepted.
        """
        vehicle = self.get(vehicle_id)
        old_mileage = vehicle.current_mileage
        vehicle.current_mileage = mileage
        logger.info(
            "%s mileage %.1f -> %.1f km", vehicle.name, old_mileage, mileage
        )
        return old_mileage

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def update_all(self, reference: CalendarDate) -> None:
        """Re-evaluate every vehicle against the reference date."""
        for vehicle in self.vehicles:
            vehicle.evaluate_status(reference)

    def with_status(self, status: Status) -> List[Vehicle]:
        return [v for v in self.vehicles if v.status is status]

    def due_or_overdue(self) -> List[Vehicle]:
        """Vehicles currently DUE_SOON or OVERDUE, in fleet order."""
        return [v for v in self.vehicles if v.status.is_due]

    def summarize(
        self, reference: CalendarDate
    ) -> Tuple[List[Vehicle], List[Vehicle]]:
        """Evaluate all vehicles and return (overdue, due_soon)."""
        self.update_all(reference)
        return self.with_status(Status.OVERDUE), self.with_status(Status.DUE_SOON)
