"""How many of a slot's remaining stations can still be covered.

Strict "never the same station twice a day" exclusion means a purely greedy
pick can strand a later station: the only person left for Expo 2 may be the
one who already worked it. Before each pick the allocator asks how many of
the remaining stations each candidate's choice would still leave coverable,
which is a bipartite matching (stations x people) solved as a max flow.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ortools.graph.python import max_flow

from rotation.domain.models import DailyStaff

_SOURCE = 0
_SINK = 1


def max_coverable(
    positions: Sequence[str],
    people: Sequence[DailyStaff],
    can_work: Callable[[DailyStaff, str], bool],
) -> int:
    """Largest number of `positions` that `people` can cover at once, one station each.

    Args:
        positions: Stations still to fill in this slot.
        people: People not yet placed in this slot.
        can_work: Eligibility test for a (person, station) pair.
    """
    if not positions or not people:
        return 0

    flow = max_flow.SimpleMaxFlow()
    first_person_node = 2 + len(positions)
    has_edge = False
    for i, position in enumerate(positions):
        position_node = 2 + i
        flow.add_arc_with_capacity(_SOURCE, position_node, 1)
        for j, person in enumerate(people):
            if can_work(person, position):
                flow.add_arc_with_capacity(position_node, first_person_node + j, 1)
                has_edge = True
    if not has_edge:
        return 0
    for j in range(len(people)):
        flow.add_arc_with_capacity(first_person_node + j, _SINK, 1)

    status = flow.solve(_SOURCE, _SINK)
    if status != flow.OPTIMAL:
        raise RuntimeError(f"Station coverage check failed with max-flow status {status}.")
    return flow.optimal_flow()
