"""Shared helpers for summarizing generated rotations."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from rotation.config import HOT_POSITIONS, TIME_SLOTS
from rotation.domain.models import Assignment, DailyStaff


def summarize_staff(
    schedule: Mapping[str, Sequence[Assignment]],
    people: Iterable[DailyStaff],
) -> Dict[str, Dict[str, object]]:
    """
    Collect what each person works today.

    Returns:
        staff_id -> {
            "name": display name,
            "positions": {slot: position or None when off/idle},
            "hot_count": hot stations worked,
            "slots_worked": slots with a station,
            "slots_available": slots covered by the shift,
        }
    """
    summary: Dict[str, Dict[str, object]] = {}
    for person in people:
        summary[person.staff_id] = {
            "name": person.name,
            "positions": {slot: None for slot in TIME_SLOTS},
            "hot_count": 0,
            "slots_worked": 0,
            "slots_available": len(person.available_slots),
        }

    for slot, assignments in schedule.items():
        for assignment in assignments:
            if assignment.is_unfilled or assignment.staff_id not in summary:
                continue
            stats = summary[assignment.staff_id]
            stats["positions"][slot] = assignment.position
            stats["slots_worked"] += 1
            if assignment.position in HOT_POSITIONS:
                stats["hot_count"] += 1

    return summary


def count_unfilled(schedule: Mapping[str, Sequence[Assignment]]) -> int:
    return sum(1 for assignments in schedule.values() for a in assignments if a.is_unfilled)


def unfilled_positions(schedule: Mapping[str, Sequence[Assignment]]) -> List[tuple]:
    """(slot, position) pairs nobody could take, in slot order."""
    return [
        (slot, a.position)
        for slot in TIME_SLOTS
        for a in schedule.get(slot, [])
        if a.is_unfilled
    ]


def assignment_lookup(schedule: Mapping[str, Sequence[Assignment]]) -> Dict[tuple, Assignment]:
    """(slot, position) -> assignment, for grid rendering."""
    return {(slot, a.position): a for slot, assignments in schedule.items() for a in assignments}
