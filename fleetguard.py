#!/usr/bin/env python3
"""
Console maintenance tracker for a bus fleet.

Commands:
  menu          - Interactive menu (default)
  list          - Show all vehicles, or only those due soon / overdue
  show          - Show one vehicle by number
  update-miles  - Update a vehicle's current mileage
  delete        - Delete a vehicle by number
  export        - Export the maintenance report as CSV
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Callable, List, Optional

from fleet import (
    CalendarDate,
    DUE_SOON_KM,
    Fleet,
    FleetError,
    Status,
    Vehicle,
    export_report,
    load_fleet,
    save_fleet,
)
from fleet.config import Config, load_config
from fleet.validation import (
    AVG_DAILY_KM_RANGE,
    FUEL_EFFICIENCY_RANGE,
    HISTORY_COUNT_RANGE,
    INTERVAL_DAYS_RANGE,
    INTERVAL_KM_RANGE,
    MILEAGE_RANGE,
    VEHICLE_ID_RANGE,
    ParseResult,
    Valid,
    parse_code,
    parse_date,
    parse_driver_name,
    parse_float,
    parse_int,
)

# =============================================================================
# Formatting helpers
# =============================================================================

RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"

STATUS_COLORS = {
    Status.OK: GREEN,
    Status.DUE_SOON: YELLOW,
    Status.OVERDUE: RED,
}

BANNER = """
==========================================
        FleetGuard
   Bus Fleet Maintenance Tracker
==========================================
"""


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI color when enabled."""
    return f"{color}{text}{RESET}" if enabled else text


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.1f}" if km is not None else "-"


def format_status(status: Status, color: bool = True) -> str:
    """Status label, colored by urgency."""
    return colorize(status.label, STATUS_COLORS[status], color)


def truncate(text: Optional[str], max_len: int = 16) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def today() -> CalendarDate:
    d = date.today()
    return CalendarDate(d.day, d.month, d.year)


def make_fleet_table(vehicles: List[Vehicle], color: bool = True) -> List[List[str]]:
    """Convert vehicles to fleet summary table rows."""
    rows = []
    for v in vehicles:
        rows.append(
            [
                str(v.vehicle_id),
                v.code,
                truncate(v.driver_name),
                v.last_service.format(),
                v.next_due.format(),
                format_km(v.current_mileage),
                format_km(v.km_left),
                str(v.health_score),
                format_status(v.status, color),
            ]
        )
    return rows


FLEET_HEADERS = [
    "Bus",
    "Code",
    "Driver",
    "Last Service",
    "Next Due",
    "Current km",
    "km Left",
    "Health",
    "Status",
]


def make_detail_lines(vehicle: Vehicle, color: bool = True) -> List[str]:
    """Detail view of one vehicle."""
    title = f"{vehicle.name} ({vehicle.status.label})"
    lines = [colorize(title, STATUS_COLORS[vehicle.status], color)]
    lines.append(f"  Driver name       : {vehicle.driver_name}")
    lines.append(f"  Last service date : {vehicle.last_service.format()}")
    if vehicle.next_due.is_set:
        lines.append(f"  Next due date     : {vehicle.next_due.format()}")
    lines.append(f"  Last service km   : {vehicle.last_service_mileage:.1f}")
    lines.append(f"  Current km        : {vehicle.current_mileage:.1f}")
    lines.append(
        f"  Interval          : {vehicle.service_interval_km:.1f} km, "
        f"{vehicle.service_interval_days} days"
    )
    lines.append(f"  Km left           : {vehicle.km_left:.1f}")
    lines.append(f"  Avg daily km      : {vehicle.avg_daily_km:.1f}")
    lines.append(f"  Fuel efficiency   : {vehicle.fuel_efficiency:.1f} km/l")
    lines.append(f"  Health score      : {vehicle.health_score}/100")
    lines.append(f"  Service history   : {vehicle.service_history_count}")
    return lines


def print_fleet(vehicles: List[Vehicle], color: bool = True) -> None:
    rows = make_fleet_table(vehicles, color)
    print(tabulate(rows, headers=FLEET_HEADERS, tablefmt="simple"))


def print_summary(fleet: Fleet, reference: CalendarDate, color: bool = True) -> None:
    """Evaluate the fleet and list what needs attention."""
    if not len(fleet):
        message = "No vehicles in fleet yet. Add vehicle data to check maintenance."
        print(colorize(message, YELLOW, color))
        return

    overdue, due_soon = fleet.summarize(reference)
    if not overdue and not due_soon:
        message = "No maintenance due right now, or upcoming in the next few days."
        print(colorize(message, GREEN, color))
        return

    if overdue:
        message = "\nThese buses NEED maintenance on or before the chosen date:"
        print(colorize(message, RED, color))
        for v in overdue:
            print(f"  - {v.name} (driver: {v.driver_name})")

    if due_soon:
        message = f"\nThese buses will need maintenance SOON (within {DUE_SOON_KM} km):"
        print(colorize(message, YELLOW, color))
        for v in due_soon:
            print(f"  - {v.name} (driver: {v.driver_name}), km left: {v.km_left:.1f}")
    print()


# =============================================================================
# Interactive session
# =============================================================================


class Session:
    """
    One interactive menu session.

    Owns the fleet for its whole lifetime. ``input_fn`` reads one line of
    operator input; every prompt repeats until the input parses.
    """

    MENU = [
        "Change reference date (dd/mm/yyyy)",
        "Add new bus",
        "Edit existing bus details",
        "Update mileage",
        "Delete bus",
        "Search by bus number",
        "View all buses (all data)",
        "Show buses due soon / overdue",
        "Export maintenance report (CSV)",
        "Save & exit",
    ]

    def __init__(
        self,
        fleet: Fleet,
        reference: CalendarDate,
        config: Config,
        input_fn: Optional[Callable[[str], str]] = None,
    ):
        self.fleet = fleet
        self.reference = reference
        self.config = config
        self.color = config.color
        self.input_fn = input_fn or input

    def say(self, message: str, color: str) -> None:
        print(colorize(message, color, self.color))

    def error(self, message: str) -> None:
        self.say(message, RED)

    def success(self, message: str) -> None:
        self.say(message, GREEN)

    def ask(self, prompt: str, parser: Callable[[str], ParseResult]):
        """Prompt until ``parser`` accepts the input, then return the value."""
        while True:
            result = parser(self.input_fn(prompt))
            if isinstance(result, Valid):
                return result.value
            self.error(result.reason)

    def ask_int(self, prompt: str, bounds) -> int:
        return self.ask(prompt, lambda text: parse_int(text, *bounds))

    def ask_float(self, prompt: str, bounds) -> float:
        return self.ask(prompt, lambda text: parse_float(text, *bounds))

    def ask_code(
        self, exclude_index: int = -1, keep: Optional[str] = None
    ) -> Optional[str]:
        """Prompt for a unique code. With ``keep``, empty input returns None."""
        prompt = (
            f"Enter new bus code (leave empty to keep '{keep}'): "
            if keep
            else "Enter bus code (e.g. CHD-101A): "
        )
        while True:
            text = self.input_fn(prompt)
            if keep and not text.strip():
                return None
            result = parse_code(text)
            if not isinstance(result, Valid):
                self.error(result.reason)
                continue
            if self.fleet.code_exists(result.value, exclude_index):
                self.error(
                    "This bus code already exists (case-insensitive). "
                    "Please enter a different code."
                )
                continue
            return result.value

    def ask_vehicle_id(self, prompt: str, exclude_index: int = -1) -> int:
        """Prompt for a vehicle number not used by any other vehicle."""
        while True:
            vehicle_id = self.ask_int(prompt, VEHICLE_ID_RANGE)
            if self.fleet.id_exists(vehicle_id, exclude_index):
                self.error(
                    "This bus number already exists. Please enter a different number."
                )
                continue
            return vehicle_id

    def ask_service_fields(self, prefix: str = "") -> dict:
        """Prompt for every field after code and number, in entry order."""
        return {
            "driver_name": self.ask(
                "Enter driver name (full name): ", parse_driver_name
            ),
            "last_service": self.ask(
                f"Enter {prefix}last service date (dd/mm/yyyy): ", parse_date
            ),
            "last_service_mileage": self.ask_float(
                f"Enter {prefix}last service mileage (km): ", MILEAGE_RANGE
            ),
            "current_mileage": self.ask_float(
                f"Enter {prefix}current mileage (km): ", MILEAGE_RANGE
            ),
            "service_interval_km": self.ask_float(
                f"Enter {prefix}service interval (km), e.g. 10000: ", INTERVAL_KM_RANGE
            ),
            "service_interval_days": self.ask_int(
                f"Enter {prefix}service interval in days (0 if not used): ",
                INTERVAL_DAYS_RANGE,
            ),
            "avg_daily_km": self.ask_float(
                f"Enter {prefix}average daily km: ", AVG_DAILY_KM_RANGE
            ),
            "fuel_efficiency": self.ask_float(
                f"Enter {prefix}fuel efficiency (km/l): ", FUEL_EFFICIENCY_RANGE
            ),
            "service_history_count": self.ask_int(
                f"Enter {prefix}service history count: ", HISTORY_COUNT_RANGE
            ),
        }

    # -------------------------------------------------------------------------
    # Menu actions
    # -------------------------------------------------------------------------

    def change_reference_date(self) -> None:
        self.reference = self.ask(
            "Enter new reference date (dd/mm/yyyy): ", parse_date
        )
        self.success(f"Reference date updated to: {self.reference.format()}")
        print_summary(self.fleet, self.reference, self.color)

    def add_vehicle(self) -> None:
        code = self.ask_code()
        vehicle_id = self.ask_vehicle_id("Enter numeric bus number: ")
        fields = self.ask_service_fields()
        try:
            self.fleet.add(Vehicle(code=code, vehicle_id=vehicle_id, **fields))
        except FleetError as e:
            self.error(e.message)
            return
        self.success(f"Bus added. Total buses: {len(self.fleet)}")

    def choose_position(self) -> Optional[int]:
        if not len(self.fleet):
            self.say("No buses available to select.", YELLOW)
            return None
        print("\nAvailable buses (positions):")
        headers = ["Pos", "BusNo", "Code", "Driver"]
        print(tabulate(self.fleet.positions(), headers=headers, tablefmt="simple"))
        return self.ask_int("\nEnter position: ", (1, len(self.fleet)))

    def edit_vehicle(self) -> None:
        position = self.choose_position()
        if position is None:
            return
        vehicle = self.fleet.at_position(position)
        index = position - 1
        self.say(f"Editing position {position} ({vehicle.name})", CYAN)

        code = self.ask_code(exclude_index=index, keep=vehicle.code)
        vehicle_id = self.ask_vehicle_id(
            "Enter new numeric bus number (or same as before): ", exclude_index=index
        )
        fields = self.ask_service_fields(prefix="new ")
        try:
            self.fleet.edit_at(position, code=code, vehicle_id=vehicle_id, **fields)
        except FleetError as e:
            self.error(e.message)
            return
        self.success(f"Bus at position {position} updated.")

    def update_mileage(self) -> None:
        vehicle_id = self.ask_int(
            "Enter bus number to update mileage: ", VEHICLE_ID_RANGE
        )
        vehicle = self.fleet.find_by_id(vehicle_id)
        if vehicle is None:
            self.error("Bus not found.")
            return
        print(
            f"Current mileage for bus {vehicle.vehicle_id}: "
            f"{vehicle.current_mileage:.1f} km"
        )
        mileage = self.ask_float("Enter new current mileage (km): ", MILEAGE_RANGE)
        self.fleet.update_mileage(vehicle_id, mileage)
        self.success("Mileage updated.")

    def delete_vehicle(self) -> None:
        vehicle_id = self.ask_int("Enter bus number to delete: ", VEHICLE_ID_RANGE)
        try:
            self.fleet.delete_by_id(vehicle_id)
        except FleetError:
            self.error("Bus not found.")
            return
        self.say(f"Bus deleted. Remaining: {len(self.fleet)}", YELLOW)

    def search_vehicle(self) -> None:
        vehicle_id = self.ask_int("Enter bus number to search: ", VEHICLE_ID_RANGE)
        vehicle = self.fleet.find_by_id(vehicle_id)
        if vehicle is None:
            self.error("Bus not found.")
            return
        print("\n".join(make_detail_lines(vehicle, self.color)))

    def show_all(self) -> None:
        if not len(self.fleet):
            self.say("No buses in fleet.", YELLOW)
            return
        self.say("\n" + "=" * 16 + " Fleet Summary (All Buses) " + "=" * 16, BOLD)
        print(f"Total buses: {len(self.fleet)}\n")
        print_fleet(list(self.fleet), self.color)
        print()

    def show_due(self) -> None:
        self.say("\n=== Buses Due Soon / Overdue ===", BOLD)
        due = self.fleet.due_or_overdue()
        if not due:
            self.say("No maintenance due right now or in the next few days.", GREEN)
            return
        for vehicle in due:
            print("\n".join(make_detail_lines(vehicle, self.color)))
            print()

    def export(self) -> None:
        try:
            export_report(
                self.fleet, self.config.report_file, reference=self.reference
            )
        except FleetError as e:
            self.error(e.message)
            return
        self.success(f"CSV report exported to {self.config.report_file}")

    def save(self) -> bool:
        try:
            save_fleet(self.fleet, self.config.data_file)
        except FleetError as e:
            self.error(e.message)
            return False
        self.success(f"Fleet saved to {self.config.data_file}")
        return True

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def print_menu(self) -> None:
        print(colorize("-------------- Main Menu --------------", BOLD, self.color))
        print(f"Current reference date: {self.reference.format()}")
        print("---------------------------------------")
        for number, label in enumerate(self.MENU, start=1):
            print(f"{number}. {label}")
        print("---------------------------------------")

    def run(self) -> int:
        actions = {
            1: self.change_reference_date,
            2: self.add_vehicle,
            3: self.edit_vehicle,
            4: self.update_mileage,
            5: self.delete_vehicle,
            6: self.search_vehicle,
            7: self.show_all,
            8: self.show_due,
            9: self.export,
        }
        while True:
            self.fleet.update_all(self.reference)
            self.print_menu()
            choice = self.ask_int("Enter choice: ", (1, len(self.MENU)))
            if choice == len(self.MENU):
                if self.save():
                    print(colorize("Goodbye. Data saved.", CYAN, self.color))
                    return 0
                continue
            actions[choice]()


# =============================================================================
# Commands
# =============================================================================


def open_fleet(config: Config) -> Fleet:
    """Load the fleet; on failure report it and start empty."""
    try:
        return load_fleet(config.data_file)
    except FleetError as e:
        print(f"Error: {e.message}")
        print("Starting with an empty fleet.")
        return Fleet()


def cmd_menu(args, config: Config) -> int:
    """Run the interactive menu."""
    if config.color:
        print(colorize(BANNER, CYAN + BOLD))
    else:
        print(BANNER)
    fleet = open_fleet(config)
    if len(fleet):
        print(f"Loaded {len(fleet)} buses from {config.data_file}")

    session = Session(fleet, args.reference, config)
    try:
        if args.date is None:
            session.reference = session.ask(
                "Enter reference date for maintenance check (dd/mm/yyyy): ", parse_date
            )
        print_summary(fleet, session.reference, config.color)
        return session.run()
    except (EOFError, KeyboardInterrupt):
        print("\nExiting without saving.")
        return 1


def cmd_list(args, config: Config) -> int:
    """Show all vehicles, or only those due soon / overdue."""
    fleet = open_fleet(config)
    fleet.update_all(args.reference)

    print(f"Reference date: {args.reference.format()}")
    print(f"Total buses: {len(fleet)}")
    print()

    vehicles = fleet.due_or_overdue() if args.due else list(fleet)
    if not vehicles:
        print("No maintenance due right now." if args.due else "No buses in fleet.")
        return 0

    print_fleet(vehicles, config.color)
    return 0


def cmd_show(args, config: Config) -> int:
    """Show one vehicle by number."""
    fleet = open_fleet(config)
    try:
        vehicle = fleet.get(args.vehicle_id)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1
    vehicle.evaluate_status(args.reference)
    print("\n".join(make_detail_lines(vehicle, config.color)))
    return 0


def cmd_update_miles(args, config: Config) -> int:
    """Update a vehicle's current mileage."""
    fleet = open_fleet(config)
    try:
        vehicle = fleet.get(args.vehicle_id)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Vehicle: {vehicle.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.1f}")
    print(f"New mileage:     {args.mileage:,.1f}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    fleet.update_mileage(args.vehicle_id, args.mileage)
    fleet.update_all(args.reference)
    try:
        save_fleet(fleet, config.data_file)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1
    print(f"Mileage updated. Status: {format_status(vehicle.status, config.color)}")
    return 0


def cmd_delete(args, config: Config) -> int:
    """Delete a vehicle by number."""
    fleet = open_fleet(config)
    try:
        vehicle = fleet.get(args.vehicle_id)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"Deleting {vehicle.name} (driver: {vehicle.driver_name})")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    fleet.delete_by_id(args.vehicle_id)
    try:
        save_fleet(fleet, config.data_file)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1
    print(f"Bus deleted. Remaining: {len(fleet)}")
    return 0


def cmd_export(args, config: Config) -> int:
    """Export the maintenance report as CSV."""
    fleet = open_fleet(config)
    report_file = args.report_path or config.report_file
    try:
        count = export_report(fleet, report_file, reference=args.reference)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1
    print(f"CSV report with {count} buses exported to {report_file}")
    return 0


# =============================================================================
# Main
# =============================================================================


def setup_logging(verbosity: int, config_level: str) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, config_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bus fleet maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --date 15/06/2025 list --due
  %(prog)s show 12
  %(prog)s update-miles 12 48250 --dry-run
  %(prog)s --data-file depot2.txt export depot2.csv
""",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    parser.add_argument(
        "--data-file", type=str, help="Fleet data file (default: bus_data.txt)"
    )
    parser.add_argument(
        "--report-file", type=str, help="CSV report file (default: fleet_report.csv)"
    )
    parser.add_argument(
        "--date", type=str, help="Reference date in dd/mm/yyyy format (default: today)"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More log output (-vv for debug)",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("menu", help="Interactive menu (default)")

    list_parser = subparsers.add_parser("list", help="Show all vehicles")
    list_parser.add_argument(
        "--due", action="store_true", help="Only vehicles due soon or overdue"
    )

    show_parser = subparsers.add_parser("show", help="Show one vehicle")
    show_parser.add_argument("vehicle_id", type=int, help="Bus number")

    update_parser = subparsers.add_parser(
        "update-miles", help="Update current mileage"
    )
    update_parser.add_argument("vehicle_id", type=int, help="Bus number")
    update_parser.add_argument("mileage", type=float, help="Current mileage (km)")
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a vehicle")
    delete_parser.add_argument("vehicle_id", type=int, help="Bus number")
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without saving",
    )

    export_parser = subparsers.add_parser(
        "export", help="Export CSV maintenance report"
    )
    export_parser.add_argument(
        "report_path", nargs="?", help="Output path (default: fleet_report.csv)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except FleetError as e:
        print(f"Error: {e.message}")
        return 1
    if args.data_file:
        config.data_file = args.data_file
    if args.report_file:
        config.report_file = args.report_file
    if args.no_color:
        config.color = False
    setup_logging(args.verbose, config.log_level)

    args.reference = today()
    if args.date is not None:
        result = parse_date(args.date)
        if not isinstance(result, Valid):
            print(f"Error: {result.reason}")
            return 1
        args.reference = result.value

    commands = {
        None: cmd_menu,
        "menu": cmd_menu,
        "list": cmd_list,
        "show": cmd_show,
        "update-miles": cmd_update_miles,
        "delete": cmd_delete,
        "export": cmd_export,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main() or 0)
