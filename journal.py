#!/usr/bin/env python3
"""
Unified CLI for the car maintenance journal.

Commands:
  status       - Show the next planned service and whether it is overdue
  history      - View journal records
  stats        - Show spending statistics
  log          - Add a new record
  intervals    - List default service intervals by make
  set-interval - Set or clear the car's custom service interval
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from carjournal import (
    SERVICE_INTERVALS,
    MAX_MONTHS,
    MIN_MONTHS,
    EventType,
    MaintenanceRecord,
    NextServiceInfo,
    RecordItem,
    load_journal,
    parse_iso_date,
    save_record,
    set_custom_interval,
    spending_summary,
)

logger = logging.getLogger("journal")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float], currency: str = "") -> str:
    """Format cost for display, with the currency symbol after the amount."""
    if cost is None:
        return "-"
    text = f"{cost:,.2f}"
    return f"{text} {currency}" if currency else text


def format_days(days: Optional[int]) -> str:
    """Format remaining days for display (e.g., '3mo 15d' or '-2mo 5d')."""
    if days is None:
        return "-"
    sign = "-" if days < 0 else ""
    days = abs(days)
    months = days // 30
    remaining_days = days % 30
    if months > 0:
        return f"{sign}{months}mo {remaining_days}d"
    return f"{sign}{days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_item(spec: str) -> RecordItem:
    """Parse a 'name=cost' command line item."""
    name, sep, cost = spec.rpartition("=")
    if not sep or not name.strip():
        raise ValueError(f"Item must look like 'name=cost', got '{spec}'")
    value = float(cost)
    if value < 0:
        raise ValueError(f"Item cost must be >= 0, got {value}")
    return RecordItem(name.strip(), value)


# =============================================================================
# Status command
# =============================================================================


def make_status_table(info: NextServiceInfo) -> List[List[str]]:
    """Convert the next-service prediction to table rows."""
    return [
        ["Due (km)", format_km(info.by_mileage_km), format_km(info.km_left)],
        ["Due (date)", info.by_date, format_days(info.days_left)],
    ]


def cmd_status(args):
    """Show the next planned service and whether it is overdue."""
    journal = load_journal(args.journal_file)
    interval = journal.interval
    source = "custom" if interval.is_custom else "default"

    print(f"Car: {journal.car.name}")
    mileage = journal.current_mileage
    if mileage is not None:
        print(f"Current mileage: {format_km(mileage)} km")
    print(
        f"Service interval: {interval.interval_km:,} km / "
        f"{interval.interval_months} mo ({source})"
    )
    print(f"Records: {len(journal.car_records)}")
    print()

    try:
        today = parse_iso_date(args.as_of) if args.as_of else None
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    info = journal.next_service(today)
    if info is None:
        print("No planned service recorded yet.")
        return 0

    last = info.last_service
    print(f"Last planned service: {last.date} @ {format_km(last.mileage_km)} km")
    print("OVERDUE:" if info.overdue else "NEXT SERVICE:")
    print(
        tabulate(
            make_status_table(info),
            headers=["", "Due", "Remaining"],
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert records to table rows."""
    rows = []
    for record in records:
        future = record.event_type == EventType.FUTURE
        rows.append(
            [
                record.date or "-",
                "-" if future else format_km(record.mileage_km),
                record.event_type.label,
                truncate(record.title),
                len(record.items),
                "-" if future else format_cost(record.total_cost, record.currency),
            ]
        )
    return rows


def cmd_history(args):
    """View journal records."""
    journal = load_journal(args.journal_file)

    try:
        records = journal.filter_records(
            event_type=args.type,
            search=args.search,
            since=args.since,
            reverse=not args.asc,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    total_cost = sum(
        r.total_cost for r in records if r.event_type != EventType.FUTURE
    )
    last = journal.last_record

    print(f"Car: {journal.car.name}")
    if last:
        print(f"Last record: {last.date} @ {format_km(last.mileage_km)} km")
    print(f"Total records: {len(journal.car_records)}")
    if args.type or args.search or args.since:
        print(f"Showing: {len(records)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost, journal.car.currency)}")
    print()

    if not records:
        print("No records found.")
        return 0

    headers = ["Date", "Mileage", "Type", "Title", "Items", "Cost"]
    print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Stats command
# =============================================================================


def make_summary_table(summary: dict, currency: str) -> List[List[str]]:
    """Convert the headline figures of a spending summary to table rows."""
    cost_per_km = summary["costPerKm"]
    return [
        ["Records", summary["recordCount"]],
        ["Total spent", format_cost(summary["totalSpent"], currency)],
        ["Average per month", format_cost(summary["avgPerMonth"], currency)],
        ["Average per year", format_cost(summary["avgPerYear"], currency)],
        ["Planned", format_cost(summary["plannedTotal"], currency)],
        ["Unplanned", format_cost(summary["unplannedTotal"], currency)],
        ["Refueling", format_cost(summary["refuelingTotal"], currency)],
        ["Planned share", f"{summary['plannedShare']}%"],
        ["Cost per km", format_cost(cost_per_km, currency)],
    ]


def cmd_stats(args):
    """Show spending statistics."""
    journal = load_journal(args.journal_file)
    currency = journal.car.currency
    if not MIN_MONTHS <= args.months <= MAX_MONTHS:
        print(f"Error: --months must be between {MIN_MONTHS} and {MAX_MONTHS}")
        return 1
    try:
        today = parse_iso_date(args.as_of) if args.as_of else None
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    summary = spending_summary(journal.car_records, args.months, today)

    print(f"Car: {journal.car.name}")
    print()

    if not summary["recordCount"]:
        print("No records yet.")
        return 0

    print(tabulate(make_summary_table(summary, currency), tablefmt="simple"))
    print()

    print(f"LAST {args.months} MONTHS:")
    rows = [[m["month"], format_cost(m["total"], currency)] for m in summary["monthly"]]
    print(tabulate(rows, headers=["Month", "Total"], tablefmt="simple"))
    print()

    if summary["yearly"]:
        print("BY YEAR:")
        rows = [[y["year"], format_cost(y["total"], currency)] for y in summary["yearly"]]
        print(tabulate(rows, headers=["Year", "Total"], tablefmt="simple"))
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new record."""
    journal = load_journal(args.journal_file)
    event_type = EventType(args.type)

    try:
        items = [parse_item(spec) for spec in args.item or []]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    future = event_type == EventType.FUTURE
    if future:
        record_date = args.date or ""
    else:
        record_date = args.date or date.today().isoformat()
    if record_date:
        try:
            parse_iso_date(record_date)
        except ValueError as e:
            print(f"Error: {e}")
            return 1
    if not future and args.mileage is None:
        print("Error: --mileage is required for dated records")
        return 1

    if args.mileage is not None and args.mileage < 0:
        print("Error: --mileage must be >= 0")
        return 1

    record = MaintenanceRecord(
        date=record_date,
        mileage_km=0 if future else args.mileage,
        event_type=event_type,
        title=args.title,
        items=items,
        total_cost=sum(item.cost for item in items),
        currency=journal.car.currency,
        car_id=journal.car.id,
    )

    print(f"Adding record to {args.journal_file}:")
    print(f"  Type:    {record.event_type.label}")
    print(f"  Title:   {record.title}")
    if record.date:
        print(f"  Date:    {record.date}")
    if not future:
        print(f"  Mileage: {format_km(record.mileage_km)} km")
    for item in items:
        print(f"  Item:    {item.name} ({format_cost(item.cost, record.currency)})")
    print(f"  Total:   {format_cost(record.total_cost, record.currency)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_record(args.journal_file, record)
    print("Record saved.")
    return 0


# =============================================================================
# Intervals commands
# =============================================================================


def cmd_intervals(args):
    """List default service intervals by make."""
    journal = load_journal(args.journal_file)
    make = journal.car.make.lower()

    rows = []
    for entry in SERVICE_INTERVALS:
        marker = "*" if entry.make.lower() == make else ""
        rows.append(
            [
                marker,
                entry.make,
                f"{entry.interval_km:,} km",
                f"{entry.interval_months} mo",
                truncate(", ".join(entry.models), 40),
            ]
        )

    headers = ["", "Make", "Distance", "Time", "Models"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_set_interval(args):
    """Set or clear the car's custom service interval."""
    journal = load_journal(args.journal_file)

    if args.clear:
        km, months = None, None
    else:
        if args.km is None or args.months is None:
            print("Error: both KM and MONTHS are required (or use --clear)")
            return 1
        if args.km <= 0 or args.months <= 0:
            print("Error: KM and MONTHS must be positive")
            return 1
        km, months = args.km, args.months

    print(f"Car: {journal.car.name}")
    if km is None:
        print("Custom interval: cleared (catalog/default applies)")
    else:
        print(f"Custom interval: {km:,} km / {months} mo")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    set_custom_interval(args.journal_file, km, months)
    print("Interval updated.")
    return 0


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Car maintenance journal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s journals/yeti.yaml status
  %(prog)s journals/yeti.yaml history --type planned
  %(prog)s journals/yeti.yaml history --search oil --since 2024-01-01
  %(prog)s journals/yeti.yaml stats --months 12
  %(prog)s journals/yeti.yaml log "Oil change" --mileage 98000 \\
      --item "Oil=3200" --item "Filter=800"
  %(prog)s journals/yeti.yaml log "Timing belt" --type future
  %(prog)s journals/yeti.yaml set-interval 10000 12
""",
    )
    parser.add_argument(
        "journal_file",
        type=Path,
        help="Path to journal YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    event_types = [t.value for t in EventType]

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show the next planned service"
    )
    status_parser.add_argument(
        "--as-of",
        type=str,
        help="Evaluate as of this date (YYYY-MM-DD, default: today)",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View journal records")
    history_parser.add_argument(
        "--type",
        choices=event_types,
        help="Only records of this type",
    )
    history_parser.add_argument(
        "--search",
        type=str,
        help="Filter to records whose title or items contain text (case-insensitive)",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only records since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Oldest first instead of newest first",
    )

    # Stats subcommand
    stats_parser = subparsers.add_parser("stats", help="Show spending statistics")
    stats_parser.add_argument(
        "--months",
        type=int,
        default=6,
        help="Months in the monthly breakdown (default: 6)",
    )
    stats_parser.add_argument(
        "--as-of",
        type=str,
        help="End the monthly breakdown at this date's month (YYYY-MM-DD)",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new record")
    log_parser.add_argument("title", type=str, help="Short description")
    log_parser.add_argument(
        "--type",
        choices=event_types,
        default=EventType.PLANNED.value,
        help="Record type (default: planned)",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Record date in YYYY-MM-DD format (default: today, none for future)",
    )
    log_parser.add_argument(
        "--mileage",
        type=int,
        help="Odometer reading in km",
    )
    log_parser.add_argument(
        "--item",
        action="append",
        help="Line item as 'name=cost' (repeatable)",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Intervals subcommand
    subparsers.add_parser("intervals", help="List default service intervals")

    # Set Interval subcommand
    set_interval_parser = subparsers.add_parser(
        "set-interval", help="Set or clear the custom service interval"
    )
    set_interval_parser.add_argument("km", type=int, nargs="?", help="Interval km")
    set_interval_parser.add_argument(
        "months", type=int, nargs="?", help="Interval months"
    )
    set_interval_parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove the custom interval",
    )
    set_interval_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Validate journal file exists
    if not args.journal_file.exists():
        print(f"Error: File not found: {args.journal_file}")
        return 1

    # Dispatch to command handler
    commands = {
        "status": cmd_status,
        "history": cmd_history,
        "stats": cmd_stats,
        "log": cmd_log,
        "intervals": cmd_intervals,
        "set-interval": cmd_set_interval,
    }
    logger.debug("Running %s on %s", args.command, args.journal_file)
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main() or 0)
