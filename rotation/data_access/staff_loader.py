"""CSV loading utilities for staff profiles."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from rotation.config import (
    DEFAULT_SENIORITY,
    MAX_PREFERENCE,
    MIN_PREFERENCE,
    PREFERENCE_POSITIONS,
    SENIORITY_RANKS,
)
from rotation.domain.models import StaffProfile, normalize_position_name


def _normalize_columns(df: pd.DataFrame) -> Dict[str, str]:
    """Create mapping from lowercase column names to original names."""
    normalized: Dict[str, str] = {}
    for column in df.columns:
        key = column.strip().lower()
        if key in normalized:
            raise ValueError(f"Duplicate column detected when normalizing headers: '{column}'")
        normalized[key] = column.strip()
    return normalized


def _coerce_numeric(value, column_name: str, record_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid numeric value '{value}' for column '{column_name}' on record '{record_name}'"
        ) from None


def _cell_text(value) -> str:
    if pd.isna(value):
        return ""
    return str(value).strip()


def _parse_seniority(raw, record_name: str) -> str:
    """Match a seniority label case-insensitively; unknown labels fall back to the newest tier."""
    text = _cell_text(raw)
    if not text:
        return DEFAULT_SENIORITY
    for label in SENIORITY_RANKS:
        if label.lower() == text.lower():
            return label
    print(
        f"WARNING: Unknown seniority '{text}' for '{record_name}'; treating as {DEFAULT_SENIORITY}.",
        file=sys.stderr,
    )
    return DEFAULT_SENIORITY


def _parse_preference(value, column_name: str, record_name: str) -> Optional[int]:
    """Whole number from 1 to 5, or None (neutral) with a warning when the cell is unusable."""
    try:
        level = _coerce_numeric(value, column_name, record_name)
    except ValueError as exc:
        print(f"WARNING: {exc}; using a neutral preference.", file=sys.stderr)
        return None
    if not math.isfinite(level) or level != int(level) or not MIN_PREFERENCE <= level <= MAX_PREFERENCE:
        print(
            f"WARNING: Preference for '{column_name}' on record '{record_name}' must be a whole number "
            f"from {MIN_PREFERENCE} to {MAX_PREFERENCE} (got {value}); using a neutral preference.",
            file=sys.stderr,
        )
        return None
    return int(level)


def load_staff_profiles(path: Path) -> Dict[str, StaffProfile]:
    """Load staff profiles (seniority + station preferences) from a CSV file.

    Expected CSV columns:
    - id: Stable staff identifier
    - name: Display name
    - seniority (optional): GM, AGM, Captain or Team Member
    - one optional column per preference station (e.g. "Grill 1", "P.O.S.",
      "Lobby/Dish 1"), holding a 1-5 preference; blank cells mean neutral

    Second station instances (Grill 2, Lobby/Dish 2) share their primary's
    preference and have no column of their own.

    Returns:
        Profiles keyed by staff id.

    Raises:
        FileNotFoundError: If the CSV file doesn't exist.
        ValueError: Missing required columns or duplicate ids.

    Unusable preference cells (not a whole number from 1 to 5) are reported
    on stderr and treated as neutral.
    """
    if not path.exists():
        raise FileNotFoundError(f"Staff profile CSV not found: {path}")

    df = pd.read_csv(path, dtype=str)
    df.columns = [col.strip() for col in df.columns]
    column_map = _normalize_columns(df)

    def require_column(name: str) -> str:
        if name not in column_map:
            raise ValueError(f"Required column '{name}' not found in {path}")
        return column_map[name]

    id_col = require_column("id")
    name_col = require_column("name")
    seniority_col = column_map.get("seniority")

    preference_cols: Dict[str, str] = {}
    for column in df.columns:
        position = normalize_position_name(column)
        if position in PREFERENCE_POSITIONS:
            preference_cols[position] = column

    profiles: Dict[str, StaffProfile] = {}
    for _, row in df.iterrows():
        staff_id = _cell_text(row[id_col])
        if not staff_id:
            raise ValueError("Encountered staff row with empty id.")
        if staff_id in profiles:
            raise ValueError(f"Duplicate staff id detected: '{staff_id}'")
        name = _cell_text(row[name_col]) or staff_id

        preferences: Dict[str, int] = {}
        for position, column in preference_cols.items():
            if not _cell_text(row[column]):
                continue
            level = _parse_preference(row[column], column, name)
            if level is not None:
                preferences[position] = level

        profiles[staff_id] = StaffProfile(
            staff_id=staff_id,
            name=name,
            seniority=_parse_seniority(row[seniority_col], name) if seniority_col else DEFAULT_SENIORITY,
            preferences=preferences,
        )

    return profiles
