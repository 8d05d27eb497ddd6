"""Decide which stations are open in each time slot."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from rotation.config import (
    ALL_POSITIONS,
    ESSENTIAL_POSITIONS,
    LAST_SLOT,
    MIN_HEADCOUNT,
    POSITION_PRIORITY,
    SECOND_GRILL,
    TIME_SLOTS,
)
from rotation.domain.models import InsufficientStaffError


def select_positions(headcount: int, reduced_risk_mode: bool, slot: str) -> List[str]:
    """Return the open positions for one slot, in priority order.

    Rules, in order:
    - fewer than MIN_HEADCOUNT people raises InsufficientStaffError;
    - headcount picks that many positions off the priority list
      (5 = essentials, 6 = + Lobby/Dish 1, 7 = + Grill 2, 8+ = all);
    - one-griller mode removes Grill 2 and lets the next station move up;
    - the last slot of the day never runs Grill 2.

    Args:
        headcount: Number of people on today's roster.
        reduced_risk_mode: True for "one griller only" days.
        slot: One of TIME_SLOTS.

    Raises:
        InsufficientStaffError: headcount below the staffing minimum.
        ValueError: slot is not a known time slot.
    """
    if headcount < MIN_HEADCOUNT:
        raise InsufficientStaffError(headcount, MIN_HEADCOUNT)
    if slot not in TIME_SLOTS:
        raise ValueError(f"Unknown time slot '{slot}'. Use one of: {', '.join(TIME_SLOTS)}.")

    priority = [p for p in POSITION_PRIORITY if not (reduced_risk_mode and p == SECOND_GRILL)]
    positions = priority[:headcount]

    if slot == LAST_SLOT:
        positions = [p for p in positions if p != SECOND_GRILL]
    return positions


def positions_by_slot(headcount: int, reduced_risk_mode: bool) -> Dict[str, List[str]]:
    """Open positions for every slot of the day, keyed in chronological order."""
    return {slot: select_positions(headcount, reduced_risk_mode, slot) for slot in TIME_SLOTS}


def split_mandatory(positions: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split a slot's positions into (essentials in given order, optional in catalog order)."""
    positions = list(positions)
    mandatory = [p for p in positions if p in ESSENTIAL_POSITIONS]
    optional = [p for p in ALL_POSITIONS if p in positions and p not in ESSENTIAL_POSITIONS]
    return mandatory, optional

