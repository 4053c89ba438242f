"""Loading, saving and exporting fleet data."""

import csv
import logging
from pathlib import Path
from typing import List, Optional, Union

from .calendar_date import CalendarDate
from .exceptions import DuplicateKeyError, StoreIOError
from .status import Status
from .store import Fleet
from .vehicle import FIELD_SEPARATOR, Vehicle, check_text_field

logger = logging.getLogger(__name__)

DATA_FILE = "bus_data.txt"
REPORT_FILE = "fleet_report.csv"
FIELD_COUNT = 19

REPORT_HEADERS = [
    "BusNo",
    "BusCode",
    "DriverName",
    "LastServiceDate",
    "NextDueDate",
    "CurrentKm",
    "KmLeft",
    "HealthScore",
    "Status",
    "ServiceHistoryCount",
]


class MalformedLineError(ValueError):
    """A data file line that cannot be parsed into a vehicle."""


def _vehicle_to_line(vehicle: Vehicle) -> str:
    """Serialize a Vehicle to one pipe-delimited data file line."""
    fields = [
        check_text_field("code", vehicle.code),
        check_text_field("driver name", vehicle.driver_name),
        vehicle.vehicle_id,
        vehicle.last_service.day,
        vehicle.last_service.month,
        vehicle.last_service.year,
        vehicle.next_due.day,
        vehicle.next_due.month,
        vehicle.next_due.year,
        f"{vehicle.current_mileage:.2f}",
        f"{vehicle.last_service_mileage:.2f}",
        f"{vehicle.service_interval_km:.2f}",
        vehicle.service_interval_days,
        vehicle.service_history_count,
        vehicle.status.value,
        f"{vehicle.km_left:.2f}",
        vehicle.health_score,
        f"{vehicle.avg_daily_km:.2f}",
        f"{vehicle.fuel_efficiency:.2f}",
    ]
    return FIELD_SEPARATOR.join(str(f) for f in fields)


def _parse_line(line: str) -> Vehicle:
    """Parse one data file line into a Vehicle."""
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        raise MalformedLineError(f"expected {FIELD_COUNT} fields, found {len(fields)}")
    try:
        return Vehicle(
            code=fields[0],
            driver_name=fields[1],
            vehicle_id=int(fields[2]),
            last_service=CalendarDate(int(fields[3]), int(fields[4]), int(fields[5])),
            next_due=CalendarDate(int(fields[6]), int(fields[7]), int(fields[8])),
            current_mileage=float(fields[9]),
            last_service_mileage=float(fields[10]),
            service_interval_km=float(fields[11]),
            service_interval_days=int(fields[12]),
            service_history_count=int(fields[13]),
            status=Status(int(fields[14])),
            km_left=float(fields[15]),
            health_score=int(fields[16]),
            avg_daily_km=float(fields[17]),
            fuel_efficiency=float(fields[18]),
        )
    except ValueError as e:
        raise MalformedLineError(str(e)) from e


def load_fleet(filename: Union[str, Path] = DATA_FILE) -> Fleet:
    """
    Load a fleet from a data file.

    A missing file gives an empty fleet. Malformed or duplicate records are
    logged and skipped; the rest of the file still loads. Raises StoreIOError
    when the file exists but cannot be read.
    """
    path = Path(filename)
    fleet = Fleet()
    if not path.exists():
        logger.info("No data file at %s, starting with an empty fleet", path)
        return fleet

    try:
        with open(path, "r", encoding="utf-8") as fp:
            lines = fp.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise StoreIOError(f"Could not read data file {path}: {e}", path) from e

    if not lines:
        logger.warning("Data file %s is empty", path)
        return fleet
    try:
        declared = int(lines[0].strip())
    except ValueError:
        declared = -1
    if declared < 0:
        logger.warning("Data file %s is invalid (bad record count)", path)
        return fleet

    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            fleet.add(_parse_line(line), reset_status=False)
        except MalformedLineError as e:
            logger.warning("Corrupted line %d in %s skipped: %s", line_no, path, e)
        except DuplicateKeyError as e:
            logger.warning("Line %d in %s skipped: %s", line_no, path, e)

    if len(fleet) != declared:
        logger.warning(
            "Data file %s declares %d records, loaded %d", path, declared, len(fleet)
        )
    logger.info("Loaded %d vehicles from %s", len(fleet), path)
    return fleet


def save_fleet(fleet: Fleet, filename: Union[str, Path] = DATA_FILE) -> None:
    """
    Write the whole fleet to a data file, replacing its contents.

    Raises StoreIOError on failure, or InvalidFieldError (before the file is
    opened) for a text field holding the separator or a line break. The fleet
    object is left untouched.
    """
    path = Path(filename)
    lines: List[str] = [str(len(fleet))]
    lines.extend(_vehicle_to_line(v) for v in fleet)
    try:
        with open(path, "w", encoding="utf-8") as fp:
            fp.write("\n".join(lines) + "\n")
    except OSError as e:
        raise StoreIOError(f"Could not write data file {path}: {e}", path) from e
    logger.info("Saved %d vehicles to %s", len(fleet), path)


def _report_row(vehicle: Vehicle) -> list:
    return [
        vehicle.vehicle_id,
        vehicle.code,
        vehicle.driver_name,
        vehicle.last_service.format(absent=""),
        vehicle.next_due.format(absent=""),
        round(vehicle.current_mileage, 1),
        round(vehicle.km_left, 1),
        vehicle.health_score,
        vehicle.status.label,
        vehicle.service_history_count,
    ]


def export_report(
    fleet: Fleet,
    filename: Union[str, Path] = REPORT_FILE,
    reference: Optional[CalendarDate] = None,
) -> int:
    """
    Export a CSV maintenance report and return the number of rows written.

    Text columns are quoted, numbers are not. With a ``reference`` date every
    vehicle is re-evaluated first; without one the derived columns are written
    as they stand.
    """
    if reference is not None:
        fleet.update_all(reference)
    path = Path(filename)
    try:
        with open(path, "w", newline="", encoding="utf-8") as fp:
            fp.write(",".join(REPORT_HEADERS) + "\n")
            writer = csv.writer(fp, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
            for vehicle in fleet:
                writer.writerow(_report_row(vehicle))
    except OSError as e:
        raise StoreIOError(f"Could not write report {path}: {e}", path) from e
    logger.info("Exported %d vehicles to %s", len(fleet), path)
    return len(fleet)
