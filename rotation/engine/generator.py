"""Entry point that turns today's CSVs and the history file into a printed, saved rotation."""

from __future__ import annotations

import datetime
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rotation.config import DEFAULT_HISTORY_PATH, MIN_HEADCOUNT, SCORE_WEIGHTS, ScoreWeights
from rotation.data_access.history_store import (
    build_history_entry,
    history_view,
    load_history,
    merge_history,
    save_history,
)
from rotation.data_access.roster_loader import load_daily_roster
from rotation.data_access.staff_loader import load_staff_profiles
from rotation.domain.models import Assignment, InsufficientStaffError
from rotation.engine.allocator import allocate, build_daily_staff
from rotation.engine.positions import positions_by_slot
from rotation.reporting.console import print_schedule
from rotation.reporting.export import export_schedule_to_excel
from rotation.reporting.stats import count_unfilled


def generate_schedule(
    roster_csv: Path,
    staff_csv: Path,
    history_path: Path = Path(DEFAULT_HISTORY_PATH),
    output_path: Optional[Path] = None,
    date: Optional[str] = None,
    reduced_risk_mode: bool = False,
    hazard_exempt: Optional[str] = None,
    explain: bool = False,
    save: bool = True,
    weights: ScoreWeights = SCORE_WEIGHTS,
) -> Dict[str, List[Assignment]]:
    """Load today's inputs, build the rotation, report it and record it in history."""

    date = date or datetime.date.today().isoformat()
    roster = load_daily_roster(roster_csv)
    if not roster:
        raise ValueError("No staff on today's roster. Add who is working before generating a schedule.")
    if len(roster) < MIN_HEADCOUNT:
        raise InsufficientStaffError(len(roster), MIN_HEADCOUNT)

    profiles = load_staff_profiles(staff_csv)
    missing_profiles = [entry.name for entry in roster if entry.staff_id not in profiles]
    if missing_profiles:
        print(
            f"WARNING: No staff profile for {', '.join(missing_profiles)}; using neutral preferences.",
            file=sys.stderr,
        )

    people = build_daily_staff(roster, profiles)
    by_id = {person.staff_id: person for person in people}
    if hazard_exempt and hazard_exempt not in by_id:
        print(f"WARNING: Grill opener '{hazard_exempt}' is not on today's roster; ignoring.", file=sys.stderr)
        hazard_exempt = None

    entries = load_history(history_path)
    schedule = allocate(
        people,
        positions_by_slot(len(people), reduced_risk_mode),
        hazard_exempt_id=hazard_exempt,
        history=history_view(entries, before=date),
        weights=weights,
    )

    print_schedule(
        schedule,
        people,
        date=date,
        reduced_risk_mode=reduced_risk_mode,
        hazard_exempt_name=by_id[hazard_exempt].name if hazard_exempt else None,
        explain=explain,
    )

    unfilled = count_unfilled(schedule)
    if unfilled:
        print(f"\nWARNING: {unfilled} station slot(s) left unfilled.", file=sys.stderr)

    if output_path is not None:
        export_schedule_to_excel(schedule, people, output_path)
        print(f"\nSaved workbook to {output_path}")

    if save:
        new_entry = build_history_entry(date, roster, hazard_exempt, schedule)
        save_history(history_path, merge_history(entries, new_entry))
        print(f"Recorded {date} in {history_path}")

    return schedule
