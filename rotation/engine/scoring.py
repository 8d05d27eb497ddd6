"""Candidate scoring for a single (person, position, slot) pick."""

from __future__ import annotations

from typing import Optional

from rotation.config import FIRST_SLOT, HOT_POSITION_TYPES, SCORE_WEIGHTS, SENIORITY_RANKS, ScoreWeights
from rotation.domain.models import AllocationState, DailyStaff, HistoryView, ScoreBreakdown

_NEWEST_RANK = max(SENIORITY_RANKS.values())


def hazard_type(position: str) -> Optional[str]:
    """Hazard grouping for a hot station (both grills are "Grill"), None for safe ones."""
    return HOT_POSITION_TYPES.get(position)


def is_eligible(
    person: DailyStaff,
    position: str,
    slot: str,
    state: AllocationState,
    hazard_exempt_id: Optional[str],
) -> bool:
    """Hard skips: never the same station twice a day, no hot station for the grill opener at open."""
    if state.has_worked(person.staff_id, position):
        return False
    if hazard_exempt_id and person.staff_id == hazard_exempt_id:
        if hazard_type(position) and slot == FIRST_SLOT:
            return False
    return True


def hot_repeat_penalty(person: DailyStaff, position: str, state: AllocationState, weights: ScoreWeights) -> float:
    """Penalty for a second hot station today; senior staff pay less, repeating the same type pays more."""
    kind = hazard_type(position)
    if not kind or state.hazard_count(person.staff_id) < 1:
        return 0.0
    steps_above = _NEWEST_RANK + 1 - person.seniority_rank
    penalty = weights.hot_repeat_base - weights.hot_repeat_seniority_step * steps_above
    if state.has_hazard_type(person.staff_id, kind):
        penalty += weights.hot_same_type_penalty
    return penalty


def score_candidate(
    person: DailyStaff,
    position: str,
    slot: str,
    state: AllocationState,
    history: HistoryView,
    weights: ScoreWeights = SCORE_WEIGHTS,
) -> ScoreBreakdown:
    """Score an eligible person for a position. Higher totals are better fits."""
    variety = 0.0 if state.has_worked(person.staff_id, position) else weights.variety_bonus
    same_slot = (
        weights.same_slot_yesterday_penalty
        if history.worked_same_slot_yesterday(person.staff_id, position, slot)
        else 0.0
    )
    return ScoreBreakdown(
        preference=float(person.preference_for(position)),
        variety_bonus=variety,
        history_penalty=history.frequency(person.staff_id, position) * weights.history_penalty,
        same_slot_yesterday_penalty=same_slot,
        hazard_penalty=hot_repeat_penalty(person, position, state, weights),
    )
