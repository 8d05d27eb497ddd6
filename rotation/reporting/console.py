"""Console output helpers for generated rotations."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from rotation.config import ALL_POSITIONS, TIME_SLOTS
from rotation.domain.models import Assignment, DailyStaff
from rotation.reporting.stats import assignment_lookup, summarize_staff, unfilled_positions


def print_schedule(
    schedule: Mapping[str, Sequence[Assignment]],
    people: Sequence[DailyStaff],
    date: Optional[str] = None,
    reduced_risk_mode: bool = False,
    hazard_exempt_name: Optional[str] = None,
    explain: bool = False,
):
    """
    Display the rotation grid with a staff summary.
    """

    print("\n" + "=" * 80)
    title = "ROTATION SCHEDULE" + (f" - {date}" if date else "")
    print(title)
    print("=" * 80)
    print(f"  - {len(people)} staff working")
    if reduced_risk_mode:
        print("  - One griller only")
    if hazard_exempt_name:
        print(f"  - Grill opener: {hazard_exempt_name} (off hot stations until 12pm)")

    lookup = assignment_lookup(schedule)
    column_width = 18

    header = f"\n{'Position':<16}" + "".join(f"{slot:<{column_width}}" for slot in TIME_SLOTS)
    print(header)
    print("─" * (16 + column_width * len(TIME_SLOTS)))

    for position in ALL_POSITIONS:
        cells = [lookup.get((slot, position)) for slot in TIME_SLOTS]
        # Rows nobody works in any slot are hidden
        if not any(cell is not None and not cell.is_unfilled for cell in cells):
            continue
        row = f"{position:<16}"
        for cell in cells:
            name = cell.staff_name if cell is not None and not cell.is_unfilled else "-"
            row += f"{name:<{column_width}}"
        print(row)

    gaps = unfilled_positions(schedule)
    if gaps:
        print("\nUnfilled:")
        for slot, position in gaps:
            print(f"  - {slot}: {position}")

    print(f"\n{'=' * 80}")
    print("STAFF SUMMARY")
    print(f"{'=' * 80}\n")

    print(f"{'Staff':<16}" + "".join(f"{slot:<{column_width}}" for slot in TIME_SLOTS) + "Hot")
    print("─" * 80)

    for staff_id, stats in summarize_staff(schedule, people).items():
        row = f"{stats['name']:<16}"
        for slot in TIME_SLOTS:
            position = stats["positions"][slot]
            row += f"{position or '-':<{column_width}}"
        hot = stats["hot_count"]
        row += f"{hot}" + (" ⚠" if hot > 1 else "")
        print(row)

    if not explain:
        return

    print(f"\n{'=' * 80}")
    print("SCORE DETAILS")
    print(f"{'=' * 80}")
    for slot in TIME_SLOTS:
        if slot not in schedule:
            continue
        print(f"\n{slot}")
        for assignment in schedule[slot]:
            if assignment.breakdown is None:
                print(f"  {assignment.position:<14}{assignment.staff_name}")
                continue
            b = assignment.breakdown
            print(
                f"  {assignment.position:<14}{assignment.staff_name:<16}"
                f"total {b.total:8.1f}  (pref {b.preference:.0f}, variety +{b.variety_bonus:.0f}, "
                f"history -{b.history_penalty:.1f}, yesterday -{b.same_slot_yesterday_penalty:.0f}, "
                f"hot -{b.hazard_penalty:.0f})"
            )
