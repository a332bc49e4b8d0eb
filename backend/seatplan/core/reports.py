"""
Reports

Pure functions over an arrangement snapshot: occupancy statistics and
the JSON/CSV exports.
"""

import csv
import io
from collections import Counter
from typing import Dict

from seatplan.core.errors import ValidationFailed
from seatplan.models.api import MenuStatistics, SeatingStatistics, TableStatistics
from seatplan.models.arrangement import ArrangementSnapshot

CSV_HEADER = ["Table", "Seat", "Guest ID", "Menu", "Special Requirements"]
EXPORT_FORMATS = ("json", "csv")


def percentage(part: int, whole: int) -> float:
    """Share of `part` in `whole` as 0-100, or 0 when `whole` is 0."""
    if whole <= 0:
        return 0.0
    return (part / whole) * 100


def compute_statistics(snapshot: ArrangementSnapshot) -> SeatingStatistics:
    """
    Occupancy and menu usage for a snapshot.

    Per-table occupancy is measured against the table's capacity, so a
    table holding guests on seats above its capacity can exceed 100.
    """
    total_seats = len(snapshot.seats)
    assigned_seats = sum(1 for seat in snapshot.seats if seat.guest_id is not None)

    seats_per_table = Counter(seat.table_id for seat in snapshot.seats)
    assigned_per_table = Counter(seat.table_id for seat in snapshot.seats if seat.guest_id is not None)
    menu_usage = Counter(seat.menu_option_id for seat in snapshot.seats if seat.menu_option_id is not None)

    table_stats: Dict[str, TableStatistics] = {}
    for table in snapshot.tables:
        seat_count = seats_per_table[table.id]
        assigned = assigned_per_table[table.id]
        table_stats[table.id] = TableStatistics(
            name=table.name,
            capacity=table.capacity,
            seat_count=seat_count,
            assigned=assigned,
            unassigned=seat_count - assigned,
            occupancy_rate=percentage(assigned, table.capacity),
            seats_over_capacity=max(0, seat_count - table.capacity),
        )

    menu_stats: Dict[str, MenuStatistics] = {}
    for option in snapshot.menu_options:
        count = menu_usage[option.id]
        menu_stats[option.id] = MenuStatistics(
            name=option.name,
            count=count,
            percentage=percentage(count, total_seats),
        )

    return SeatingStatistics(
        total_tables=len(snapshot.tables),
        total_seats=total_seats,
        assigned_seats=assigned_seats,
        unassigned_seats=total_seats - assigned_seats,
        occupancy_rate=percentage(assigned_seats, total_seats),
        table_stats=table_stats,
        menu_stats=menu_stats,
    )


def export_json(snapshot: ArrangementSnapshot) -> str:
    return snapshot.model_dump_json(indent=2)


def export_csv(snapshot: ArrangementSnapshot) -> str:
    """
    One row per seat, ordered by table then seat position.

    Seat numbers are 1-based. Fields are quoted only when they contain a
    delimiter, quote or line break.
    """
    table_order = {table.id: index for index, table in enumerate(snapshot.tables)}
    table_names = {table.id: table.name for table in snapshot.tables}
    menu_names = {option.id: option.name for option in snapshot.menu_options}

    seats = sorted(
        snapshot.seats,
        key=lambda seat: (table_order.get(seat.table_id, len(table_order)), seat.position),
    )

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for seat in seats:
        writer.writerow([
            table_names.get(seat.table_id, ""),
            seat.position + 1,
            seat.guest_id or "",
            menu_names.get(seat.menu_option_id, "") if seat.menu_option_id else "",
            seat.special_requirements or "",
        ])
    return buffer.getvalue().rstrip("\n")


def export_snapshot(snapshot: ArrangementSnapshot, fmt: str = "json") -> str:
    """Render a snapshot in one of `EXPORT_FORMATS`."""
    normalized = (fmt or "").strip().lower()
    if normalized == "json":
        return export_json(snapshot)
    if normalized == "csv":
        return export_csv(snapshot)
    raise ValidationFailed(
        f"Unsupported export format '{fmt}'. Allowed: {list(EXPORT_FORMATS)}",
        {"format": fmt},
    )
