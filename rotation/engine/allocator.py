"""Greedy slot-by-slot allocation of people to stations."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from rotation.config import MIN_HEADCOUNT, SCORE_WEIGHTS, SHIFT_DURATIONS, TIME_SLOTS, ScoreWeights
from rotation.domain.models import (
    AllocationState,
    Assignment,
    DailyStaff,
    HistoryView,
    InsufficientStaffError,
    RosterEntry,
    StaffProfile,
    seniority_rank,
)
from rotation.engine.coverage import max_coverable
from rotation.engine.positions import split_mandatory
from rotation.engine.scoring import hazard_type, is_eligible, score_candidate


def build_daily_staff(
    roster: Iterable[RosterEntry],
    profiles: Mapping[str, StaffProfile],
) -> List[DailyStaff]:
    """Combine today's roster with staff profiles, keeping roster order.

    Someone without a profile gets neutral preferences and the newest
    seniority tier. The roster name wins over the profile name.
    """
    people: List[DailyStaff] = []
    for entry in roster:
        profile = profiles.get(entry.staff_id)
        people.append(
            DailyStaff(
                staff_id=entry.staff_id,
                name=entry.name or (profile.name if profile else entry.staff_id),
                seniority_rank=seniority_rank(profile.seniority if profile else None),
                preferences=dict(profile.preferences) if profile else {},
                available_slots=tuple(SHIFT_DURATIONS.get(entry.duration, ())),
            )
        )
    return people


def _pick_best(
    candidates: Sequence[DailyStaff],
    position: str,
    later_positions: Sequence[str],
    unplaced: Sequence[DailyStaff],
    slot: str,
    state: AllocationState,
    hazard_exempt_id: Optional[str],
    history: HistoryView,
    weights: ScoreWeights,
) -> Optional[Assignment]:
    """Best candidate for one station.

    Ranked by, in order: how many later stations of the same phase stay
    coverable once the candidate is placed, score, then roster order.
    """

    def can_work(person: DailyStaff, later: str) -> bool:
        return is_eligible(person, later, slot, state, hazard_exempt_id)

    best: Optional[Assignment] = None
    best_key = (0, 0.0)
    for person in candidates:
        remaining = [other for other in unplaced if other.staff_id != person.staff_id]
        coverable = max_coverable(later_positions, remaining, can_work)
        breakdown = score_candidate(person, position, slot, state, history, weights)
        key = (coverable, breakdown.total)
        # Strictly greater: on a tie the earlier roster entry keeps the station
        if best is None or key > best_key:
            best = Assignment(
                slot=slot,
                position=position,
                staff_id=person.staff_id,
                staff_name=person.name,
                breakdown=breakdown,
            )
            best_key = key
    return best


def _fill_slot(
    slot: str,
    positions: Sequence[str],
    available: Sequence[DailyStaff],
    state: AllocationState,
    hazard_exempt_id: Optional[str],
    history: HistoryView,
    weights: ScoreWeights,
) -> List[Assignment]:
    mandatory, optional = split_mandatory(positions)
    queue = mandatory + optional  # Phase A then phase B
    placed: Set[str] = set()
    assignments: List[Assignment] = []

    for index, position in enumerate(queue):
        # Coverage only looks ahead within the current phase; optional stations never steer mandatory picks
        phase_end = len(mandatory) if index < len(mandatory) else len(queue)
        unplaced = [person for person in available if person.staff_id not in placed]
        candidates = [
            person for person in unplaced if is_eligible(person, position, slot, state, hazard_exempt_id)
        ]
        choice = _pick_best(
            candidates,
            position,
            queue[index + 1:phase_end],
            unplaced,
            slot,
            state,
            hazard_exempt_id,
            history,
            weights,
        )
        if choice is None:
            assignments.append(Assignment.unfilled(slot, position))
            continue
        assignments.append(choice)
        placed.add(choice.staff_id)
        state.record(choice.staff_id, position, hazard_type(position))
    return assignments


def allocate(
    people: Sequence[DailyStaff],
    positions_by_slot: Mapping[str, Sequence[str]],
    hazard_exempt_id: Optional[str] = None,
    history: Optional[HistoryView] = None,
    weights: ScoreWeights = SCORE_WEIGHTS,
) -> Dict[str, List[Assignment]]:
    """Assign people to each slot's positions, essentials first.

    Slots run in chronological order. Within a slot, essential stations are
    filled in the order given, then the optional ones in catalog order. Each
    pick takes the highest scoring eligible person who still leaves the rest
    of its phase (essential or optional) coverable; a station with nobody eligible comes back as an
    unfilled assignment instead of failing the run. Picks are never revisited.

    Args:
        people: Today's staff, in roster order (ties go to the earlier entry).
        positions_by_slot: Open positions per slot, from positions_by_slot().
        hazard_exempt_id: The grill opener, kept off hot stations in the first slot.
        history: Snapshot of past days; None means no history.
        weights: Score weights.

    Returns:
        Assignments per slot, mandatory stations first.

    Raises:
        InsufficientStaffError: fewer than MIN_HEADCOUNT people.
    """
    if len(people) < MIN_HEADCOUNT:
        raise InsufficientStaffError(len(people), MIN_HEADCOUNT)

    history = history if history is not None else HistoryView()
    state = AllocationState()
    schedule: Dict[str, List[Assignment]] = {}

    for slot in TIME_SLOTS:
        if slot not in positions_by_slot:
            continue
        available = [person for person in people if person.is_available(slot)]
        schedule[slot] = _fill_slot(
            slot, positions_by_slot[slot], available, state, hazard_exempt_id, history, weights
        )

    return schedule
