"""CSV loading utilities for today's roster.

The roster lists who is working the lunch rush today and how long each
person stays, e.g. "11-2pm" for the full rush or "12-2pm" for a late start.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Set

import pandas as pd

from rotation.config import DEFAULT_SHIFT_DURATION, SHIFT_DURATIONS
from rotation.domain.models import RosterEntry
from rotation.data_access.staff_loader import _cell_text, _normalize_columns


def _parse_duration(raw, record_name: str) -> str:
    """Normalized shift label; an unknown label is kept but maps to no slots."""
    text = _cell_text(raw).replace(" ", "").lower()
    if not text:
        return DEFAULT_SHIFT_DURATION
    if text not in SHIFT_DURATIONS:
        print(
            f"WARNING: Unknown shift duration '{raw}' for '{record_name}' "
            f"(use one of: {', '.join(SHIFT_DURATIONS)}); they will not be scheduled.",
            file=sys.stderr,
        )
    return text


def load_daily_roster(path: Path) -> List[RosterEntry]:
    """Load today's roster from a CSV file.

    Expected CSV columns:
    - id: Staff identifier (matches the staff profile CSV)
    - name: Display name
    - duration (optional): Shift length, blank means the full rush

    Args:
        path: Path to the roster CSV.

    Returns:
        Roster entries in file order. File order is the tie-break order
        when two people score the same for a station.

    Raises:
        FileNotFoundError: If the CSV file doesn't exist.
        ValueError: Missing columns or duplicate ids. An unknown duration
                    only warns; that person is available in no slot.

    Example:
        >>> roster = load_daily_roster(Path("today.csv"))
        >>> print(roster[0].duration)  # "11-2pm"
    """
    if not path.exists():
        raise FileNotFoundError(f"Roster CSV not found: {path}")

    df = pd.read_csv(path, dtype=str)
    df.columns = [col.strip() for col in df.columns]
    column_map = _normalize_columns(df)

    def require_column(name: str) -> str:
        if name not in column_map:
            raise ValueError(f"Required column '{name}' not found in {path}")
        return column_map[name]

    id_col = require_column("id")
    name_col = require_column("name")
    duration_col = column_map.get("duration")

    roster: List[RosterEntry] = []
    seen: Set[str] = set()
    for _, row in df.iterrows():
        staff_id = _cell_text(row[id_col])
        if not staff_id:
            raise ValueError("Roster CSV contains a row with an empty id.")
        if staff_id in seen:
            raise ValueError(f"Staff id '{staff_id}' appears on the roster more than once.")
        seen.add(staff_id)

        name = _cell_text(row[name_col]) or staff_id
        duration = _parse_duration(row[duration_col], name) if duration_col else DEFAULT_SHIFT_DURATION
        roster.append(RosterEntry(staff_id=staff_id, name=name, duration=duration))

    return roster
