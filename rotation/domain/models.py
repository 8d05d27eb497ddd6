"""Dataclasses and type definitions shared across the rotation modules."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

from rotation.config import (
    ALL_POSITIONS,
    CANONICAL_POSITIONS,
    DEFAULT_SENIORITY,
    NEUTRAL_PREFERENCE,
    SENIORITY_RANKS,
    UNFILLED_LABEL,
)


class InsufficientStaffError(ValueError):
    """Raised when fewer people are working than the essential stations need."""

    def __init__(self, headcount: int, minimum: int):
        super().__init__(
            f"You have {headcount} staff members. You need at least {minimum} staff to create a schedule."
        )
        self.headcount = headcount
        self.minimum = minimum


_POSITION_LOOKUP = {re.sub(r"[\s_]+", "", p.lower()): p for p in ALL_POSITIONS}


def normalize_position_name(name: str) -> str:
    """Map a loosely typed position label onto its catalog spelling.

    Matching ignores case, whitespace and underscores, so "grill 1",
    "GRILL_1" and "Grill1" all resolve to "Grill 1".

    Args:
        name: The position label as typed in a CSV header or history file.

    Returns:
        The catalog name, or an empty string when the label is unknown.
    """
    if not name:
        return ""
    key = re.sub(r"[\s_]+", "", name.strip().lower())
    return _POSITION_LOOKUP.get(key, "")


def canonical_position(position: str) -> str:
    return CANONICAL_POSITIONS.get(position, position)


def seniority_rank(seniority: Optional[str]) -> int:
    return SENIORITY_RANKS.get(seniority or "", SENIORITY_RANKS[DEFAULT_SENIORITY])


@dataclass(frozen=True)
class StaffProfile:
    staff_id: str
    name: str
    seniority: str = DEFAULT_SENIORITY
    preferences: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class RosterEntry:
    staff_id: str
    name: str
    duration: str


@dataclass(frozen=True)
class DailyStaff:
    """A person working today, combined with their profile and shift window."""

    staff_id: str
    name: str
    seniority_rank: int
    preferences: Mapping[str, int]
    available_slots: Tuple[str, ...]

    def preference_for(self, position: str) -> int:
        """Preference level for a position, looked up through its primary station."""
        return self.preferences.get(canonical_position(position), NEUTRAL_PREFERENCE)

    def is_available(self, slot: str) -> bool:
        return slot in self.available_slots


@dataclass(frozen=True)
class ScoreBreakdown:
    preference: float
    variety_bonus: float
    history_penalty: float
    same_slot_yesterday_penalty: float
    hazard_penalty: float

    @property
    def total(self) -> float:
        return (
            self.preference
            + self.variety_bonus
            - self.history_penalty
            - self.same_slot_yesterday_penalty
            - self.hazard_penalty
        )


@dataclass(frozen=True)
class Assignment:
    slot: str
    position: str
    staff_id: str  # Empty when nobody was eligible
    staff_name: str
    breakdown: Optional[ScoreBreakdown] = None

    @property
    def is_unfilled(self) -> bool:
        return not self.staff_id

    @classmethod
    def unfilled(cls, slot: str, position: str) -> "Assignment":
        return cls(slot=slot, position=position, staff_id="", staff_name=UNFILLED_LABEL)

    def to_record(self) -> Dict[str, str]:
        """History-file shape of a single assignment."""
        return {"position": self.position, "staffName": self.staff_name, "staffId": self.staff_id}


@dataclass
class AllocationState:
    """Per-run bookkeeping that carries across slots. Never outlives one allocate() call."""

    positions_today: Dict[str, Set[str]] = field(default_factory=dict)
    hazard_counts: Dict[str, int] = field(default_factory=dict)
    hazard_types: Dict[str, Set[str]] = field(default_factory=dict)

    def has_worked(self, staff_id: str, position: str) -> bool:
        return position in self.positions_today.get(staff_id, set())

    def hazard_count(self, staff_id: str) -> int:
        return self.hazard_counts.get(staff_id, 0)

    def has_hazard_type(self, staff_id: str, hazard_type: str) -> bool:
        return hazard_type in self.hazard_types.get(staff_id, set())

    def record(self, staff_id: str, position: str, hazard_type: Optional[str]) -> None:
        self.positions_today.setdefault(staff_id, set()).add(position)
        if hazard_type:
            self.hazard_counts[staff_id] = self.hazard_counts.get(staff_id, 0) + 1
            self.hazard_types.setdefault(staff_id, set()).add(hazard_type)


@dataclass(frozen=True)
class HistoryEntry:
    date: str  # ISO YYYY-MM-DD
    staff: Tuple[Mapping[str, str], ...] = ()
    hazard_exempt_id: str = ""
    schedule: Optional[Mapping[str, Tuple[Mapping[str, str], ...]]] = None

    def to_dict(self) -> dict:
        data: dict = {
            "date": self.date,
            "staff": [dict(person) for person in self.staff],
            "grillOpener": self.hazard_exempt_id,
        }
        if self.schedule is not None:
            data["schedule"] = {
                slot: [dict(record) for record in records] for slot, records in self.schedule.items()
            }
        return data


@dataclass(frozen=True)
class HistoryView:
    """Read-only snapshot of past days used for fairness scoring."""

    frequencies: Mapping[Tuple[str, str], int] = field(default_factory=lambda: MappingProxyType({}))
    last_day: Mapping[str, frozenset] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_entries(cls, entries: List[HistoryEntry]) -> "HistoryView":
        """Build a view from entries ordered most recent first."""
        counts: Counter = Counter()
        for entry in entries:
            for records in (entry.schedule or {}).values():
                for record in records:
                    staff_id = record.get("staffId", "")
                    if staff_id:
                        counts[(staff_id, record.get("position", ""))] += 1

        last_day: Dict[str, frozenset] = {}
        latest = next((entry for entry in entries if entry.schedule), None)
        if latest is not None:
            for slot, records in latest.schedule.items():
                last_day[slot] = frozenset(
                    (record.get("staffId", ""), record.get("position", "")) for record in records
                )
        return cls(frequencies=MappingProxyType(dict(counts)), last_day=MappingProxyType(last_day))

    def frequency(self, staff_id: str, position: str) -> int:
        return self.frequencies.get((staff_id, position), 0)

    def worked_same_slot_yesterday(self, staff_id: str, position: str, slot: str) -> bool:
        return (staff_id, position) in self.last_day.get(slot, frozenset())
