"""JSON persistence for the trailing window of finalized day schedules.

The file holds a list of day records, most recent first:

    [{"date": "2026-10-18",
      "staff": [{"id": "7", "name": "Ana", "duration": "11-2pm"}],
      "grillOpener": "7",
      "schedule": {"11am-12pm": [{"position": "P.O.S.", "staffName": "Ana", "staffId": "7"}]}}]

A day saved before its schedule was generated has no "schedule" key.
"""

from __future__ import annotations

import datetime
import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from rotation.config import HISTORY_WINDOW_DAYS
from rotation.domain.models import Assignment, HistoryEntry, HistoryView, RosterEntry, normalize_position_name


def _parse_schedule(raw) -> Optional[Dict[str, tuple]]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError("schedule must be an object keyed by time slot")
    schedule: Dict[str, tuple] = {}
    for slot, records in raw.items():
        if not isinstance(records, list):
            raise ValueError(f"schedule slot '{slot}' must be a list")
        parsed = []
        for record in records:
            if not isinstance(record, dict):
                continue
            parsed.append(
                {
                    "position": normalize_position_name(str(record.get("position", ""))),
                    "staffName": str(record.get("staffName", "")),
                    "staffId": str(record.get("staffId") or ""),
                }
            )
        schedule[str(slot)] = tuple(parsed)
    return schedule


def _parse_entry(raw) -> HistoryEntry:
    if not isinstance(raw, dict):
        raise ValueError("entry is not an object")
    date = datetime.date.fromisoformat(str(raw.get("date", "")).strip()).isoformat()
    staff = tuple(
        {key: str(value) for key, value in person.items()}
        for person in raw.get("staff") or []
        if isinstance(person, dict)
    )
    return HistoryEntry(
        date=date,
        staff=staff,
        hazard_exempt_id=str(raw.get("grillOpener") or ""),
        schedule=_parse_schedule(raw.get("schedule")),
    )


def load_history(path: Path) -> List[HistoryEntry]:
    """Read the history file, most recent day first.

    A missing file is an empty history. An unreadable file or a bad record
    is reported on stderr and skipped so scheduling can still go ahead.
    """
    if not path.exists():
        return []

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"WARNING: Could not read schedule history {path}: {exc}. Starting with no history.", file=sys.stderr)
        return []
    if not isinstance(raw, list):
        print(f"WARNING: Schedule history {path} is not a list of days. Starting with no history.", file=sys.stderr)
        return []

    entries: List[HistoryEntry] = []
    for index, item in enumerate(raw):
        try:
            entries.append(_parse_entry(item))
        except (TypeError, ValueError) as exc:
            print(f"WARNING: Skipping history record #{index + 1}: {exc}", file=sys.stderr)
    entries.sort(key=lambda entry: entry.date, reverse=True)
    return entries


def merge_history(
    entries: Iterable[HistoryEntry],
    new_entry: HistoryEntry,
    window: int = HISTORY_WINDOW_DAYS,
) -> List[HistoryEntry]:
    """Replace any record for the same date, newest first, keep the last `window` days."""
    merged = [entry for entry in entries if entry.date != new_entry.date]
    merged.append(new_entry)
    merged.sort(key=lambda entry: entry.date, reverse=True)
    return merged[:window]


def save_history(path: Path, entries: Sequence[HistoryEntry]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([entry.to_dict() for entry in entries], indent=2) + "\n", encoding="utf-8")


def build_history_entry(
    date: str,
    roster: Sequence[RosterEntry],
    hazard_exempt_id: Optional[str],
    schedule: Mapping[str, Sequence[Assignment]],
) -> HistoryEntry:
    """Package a finished day for the history file."""
    return HistoryEntry(
        date=date,
        staff=tuple({"id": e.staff_id, "name": e.name, "duration": e.duration} for e in roster),
        hazard_exempt_id=hazard_exempt_id or "",
        schedule={
            slot: tuple(assignment.to_record() for assignment in assignments)
            for slot, assignments in schedule.items()
        },
    )


def history_view(entries: Sequence[HistoryEntry], before: Optional[str] = None) -> HistoryView:
    """Freeze a scoring snapshot from the days strictly before `before` (all days when None).

    Regenerating a day therefore never scores against its own earlier draft.
    """
    return HistoryView.from_entries([entry for entry in entries if before is None or entry.date < before])
