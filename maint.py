#!/usr/bin/env python3
"""
Unified CLI for fleet maintenance tracking.

Commands:
  status    - Show oil/air filter/fuel filter status for one or all trucks
  trucks    - List trucks with a needs-maintenance flag
  upcoming  - Show the next scheduled services across the fleet
  recent    - Show maintenance performed in the last week
  log       - Add a new maintenance record
  import    - Import trucks from a CSV file
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleetmaint import (
    Fleet,
    MaintenanceRecord,
    MaintenanceType,
    Truck,
    TypeStatus,
    UpcomingMaintenance,
    load_fleet,
    add_maintenance_record,
)
from fleetmaint.csv_import import ImportRow, load_csv
from fleetmaint.loader import import_trucks, record_from_payload, truck_from_payload
from fleetmaint.validation import clean_payload, validate_maintenance

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{miles:,.0f}" if miles is not None else "-"


def format_remaining(miles_remaining: Optional[float]) -> str:
    """Format remaining miles for display (negative when overdue)."""
    if miles_remaining is None:
        return "-"
    if miles_remaining < 0:
        return f"-{abs(miles_remaining):,.0f}"
    return f"{miles_remaining:,.0f}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_timestamp(record: MaintenanceRecord) -> str:
    """Format a record's timestamp as a short date (e.g. 'Jan 5, 2025')."""
    performed = record.performed_at_datetime
    return f"{performed:%b} {performed.day}, {performed.year}"


# =============================================================================
# Table builders
# =============================================================================


def make_status_table(statuses: List[TypeStatus]) -> List[List[str]]:
    """Convert per-type statuses to table rows."""
    rows = []
    for svc in statuses:
        last_done = "-"
        if svc.record is not None:
            last_done = (
                f"{format_timestamp(svc.record)} @ {format_miles(svc.record.mileage)}"
            )
        rows.append(
            [
                svc.maintenance_type,
                svc.status.label,
                last_done,
                format_miles(svc.next_due_mileage),
                format_remaining(svc.miles_remaining),
            ]
        )
    return rows


def make_truck_table(fleet: Fleet) -> List[List[str]]:
    """Convert the fleet's trucks to table rows."""
    flags = fleet.maintenance_flags()
    rows = []
    for truck in sorted(fleet.trucks, key=lambda t: (t.make, t.model, t.year)):
        rows.append(
            [
                truck.id[:8],
                truck.name,
                truck.vin,
                truck.license_plate or "-",
                format_miles(truck.current_mileage),
                "NEEDS MAINTENANCE" if flags[truck.id] else "OK",
            ]
        )
    return rows


def make_upcoming_table(upcoming: List[UpcomingMaintenance]) -> List[List[str]]:
    """Convert upcoming services to table rows."""
    return [
        [
            item.truck.name,
            item.truck.vin,
            item.record.maintenance_type,
            format_miles(item.miles_remaining),
        ]
        for item in upcoming
    ]


def make_recent_table(fleet: Fleet, records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert recent records to table rows."""
    rows = []
    for record in records:
        truck = fleet.get_truck(record.truck_id)
        rows.append(
            [
                format_timestamp(record),
                truck.name if truck else record.truck_id,
                record.maintenance_type,
                format_miles(record.mileage),
                truncate(record.description),
            ]
        )
    return rows


def make_import_table(rows: List[ImportRow]) -> List[List[str]]:
    """Convert rejected import rows to table rows."""
    return [
        [str(row.row), str(row.data.get("vin", "-")), "; ".join(row.errors)]
        for row in rows
    ]


def find_truck(fleet: Fleet, truck_ref: str) -> Optional[Truck]:
    """Find a truck by id, id prefix, or VIN (case-insensitive)."""
    ref = truck_ref.strip().lower()
    for truck in fleet.trucks:
        if truck.id.lower() == ref or truck.vin.lower() == ref:
            return truck
    matches = [t for t in fleet.trucks if t.id.lower().startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    return None


def print_header(fleet: Fleet):
    print(f"Company: {fleet.company.name}")
    print(f"Trucks: {len(fleet.trucks)}")
    print()


# =============================================================================
# Commands
# =============================================================================


def cmd_status(args):
    """Show maintenance status for one truck or all trucks."""
    fleet = load_fleet(args.fleet_file)

    if args.truck:
        truck = find_truck(fleet, args.truck)
        if truck is None:
            print(f"Error: Unknown truck '{args.truck}'")
            return 1
        trucks = [truck]
    else:
        trucks = sorted(fleet.trucks, key=lambda t: (t.make, t.model, t.year))

    print_header(fleet)
    if not trucks:
        print("No trucks found.")
        return 0

    headers = ["Maintenance", "Status", "Last Done", "Next Due (mi)", "Remaining (mi)"]
    for truck in trucks:
        print(f"{truck.name}  VIN {truck.vin}")
        print(f"Current mileage: {format_miles(truck.current_mileage)}")
        statuses = fleet.truck_status(truck)
        print(tabulate(make_status_table(statuses), headers=headers, tablefmt="simple"))
        print()

    return 0


def cmd_trucks(args):
    """List trucks with a needs-maintenance flag."""
    fleet = load_fleet(args.fleet_file)
    print_header(fleet)

    if not fleet.trucks:
        print("No trucks found.")
        return 0

    headers = ["ID", "Truck", "VIN", "Plate", "Mileage", "Status"]
    print(tabulate(make_truck_table(fleet), headers=headers, tablefmt="simple"))
    return 0


def cmd_upcoming(args):
    """Show the next scheduled services across the fleet."""
    fleet = load_fleet(args.fleet_file)
    print_header(fleet)

    upcoming = fleet.upcoming_maintenance(limit=args.limit)
    if not upcoming:
        print("No upcoming maintenance records found.")
        return 0

    headers = ["Truck", "VIN", "Maintenance", "Due In (mi)"]
    print(tabulate(make_upcoming_table(upcoming), headers=headers, tablefmt="simple"))
    return 0


def cmd_recent(args):
    """Show maintenance performed recently."""
    fleet = load_fleet(args.fleet_file)
    print_header(fleet)

    records = fleet.recent_maintenance(days=args.days, limit=args.limit)
    if not records:
        print("No recent maintenance records found.")
        return 0

    headers = ["Date", "Truck", "Maintenance", "Mileage", "Description"]
    print(tabulate(make_recent_table(fleet, records), headers=headers, tablefmt="simple"))
    return 0


def cmd_log(args):
    """Add a new maintenance record."""
    fleet = load_fleet(args.fleet_file)

    truck = find_truck(fleet, args.truck)
    if truck is None:
        print(f"Error: Unknown truck '{args.truck}'")
        return 1

    try:
        maintenance_type = MaintenanceType.parse(args.maintenance_type)
    except ValueError:
        print(f"Error: Unknown maintenance type '{args.maintenance_type}'")
        print("\nAvailable types:")
        for t in MaintenanceType:
            print(f"  {t.value}")
        return 1

    payload = clean_payload(
        {
            "maintenance_type": maintenance_type.value,
            "mileage": args.mileage,
            "next_due_mileage": args.next_due,
            "part_make_model": args.part,
            "description": args.description,
        }
    )
    errors = validate_maintenance(payload)
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    record = record_from_payload(truck.id, payload)

    print(f"Adding maintenance record to {args.fleet_file}:")
    print(f"  Truck:    {truck.name} (VIN {truck.vin})")
    print(f"  Type:     {record.maintenance_type}")
    print(f"  Mileage:  {format_miles(record.mileage)}")
    print(f"  Next due: {format_miles(record.next_due_mileage)}")
    if record.part_make_model:
        print(f"  Part:     {record.part_make_model}")
    if record.description:
        print(f"  Notes:    {record.description}")
    if record.mileage < truck.current_mileage:
        print(
            f"  (truck mileage stays at {format_miles(truck.current_mileage)};"
            " reported mileage is lower)"
        )
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    add_maintenance_record(args.fleet_file, record)
    print("Record saved.")
    return 0


def cmd_import(args):
    """Import trucks from a CSV file."""
    if not args.csv_file.exists():
        print(f"Error: File not found: {args.csv_file}")
        return 1

    results = load_csv(args.csv_file)
    print(f"Rows: {results.total}")
    print(f"Valid: {len(results.valid)}")
    print(f"Invalid: {len(results.invalid)}")
    print()

    if results.invalid:
        headers = ["Row", "VIN", "Errors"]
        print(tabulate(make_import_table(results.invalid), headers=headers, tablefmt="simple"))
        print()

    if not results.valid:
        print("Nothing to import.")
        return 1 if results.invalid else 0

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    trucks = [truck_from_payload(row.data) for row in results.valid]
    count = import_trucks(args.fleet_file, trucks)
    print(f"Imported {count} of {len(results.valid)} trucks.")
    return 0


# =============================================================================
# Main
# =============================================================================


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fleets/acme.yaml status
  %(prog)s fleets/acme.yaml status 1HGBH41JXMN109186
  %(prog)s fleets/acme.yaml trucks
  %(prog)s fleets/acme.yaml upcoming
  %(prog)s fleets/acme.yaml recent --days 30
  %(prog)s fleets/acme.yaml log 1HGBH41JXMN109186 "Oil Change" \\
      --mileage 58000 --part "Rotella T6"
  %(prog)s fleets/acme.yaml import trucks.csv --dry-run
""",
    )
    parser.add_argument(
        "fleet_file",
        type=Path,
        help="Path to fleet YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show what maintenance is due, due soon, or good"
    )
    status_parser.add_argument(
        "truck",
        nargs="?",
        help="Truck id, id prefix or VIN (default: all trucks)",
    )

    # Trucks subcommand
    subparsers.add_parser("trucks", help="List trucks")

    # Upcoming subcommand
    upcoming_parser = subparsers.add_parser(
        "upcoming", help="Show the next scheduled services across the fleet"
    )
    upcoming_parser.add_argument(
        "--limit",
        type=positive_int,
        default=5,
        help="Number of services to show (default: 5)",
    )

    # Recent subcommand
    recent_parser = subparsers.add_parser(
        "recent", help="Show recently performed maintenance"
    )
    recent_parser.add_argument(
        "--days", type=positive_int, default=7, help="How far back to look (default: 7)"
    )
    recent_parser.add_argument(
        "--limit",
        type=positive_int,
        default=5,
        help="Number of records to show (default: 5)",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new maintenance record")
    log_parser.add_argument("truck", help="Truck id, id prefix or VIN")
    log_parser.add_argument(
        "maintenance_type",
        help="Maintenance type (e.g., 'Oil Change', 'Tire Rotation')",
    )
    log_parser.add_argument(
        "--mileage",
        type=int,
        required=True,
        help="Odometer reading at time of service",
    )
    log_parser.add_argument(
        "--next-due",
        type=int,
        help="Mileage when this service is next due (default: type's interval)",
    )
    log_parser.add_argument("--part", type=str, help="Part make/model")
    log_parser.add_argument("--description", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Import subcommand
    import_parser = subparsers.add_parser("import", help="Import trucks from CSV")
    import_parser.add_argument("csv_file", type=Path, help="CSV file with a header row")
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate without saving",
    )

    return parser


def main(argv=None):
    logging.basicConfig(
        level=os.environ.get("FLEETMAINT_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    # Validate fleet file exists
    if not args.fleet_file.exists():
        print(f"Error: File not found: {args.fleet_file}")
        return 1

    # Dispatch to command handler
    if args.command == "status":
        return cmd_status(args)
    elif args.command == "trucks":
        return cmd_trucks(args)
    elif args.command == "upcoming":
        return cmd_upcoming(args)
    elif args.command == "recent":
        return cmd_recent(args)
    elif args.command == "log":
        return cmd_log(args)
    elif args.command == "import":
        return cmd_import(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
