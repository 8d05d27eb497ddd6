"""Centralized knobs for the rotation engine. Tweak values here instead of touching the allocator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

# ---------------------------------------------------------------------------
# Day layout
# ---------------------------------------------------------------------------
TIME_SLOTS = ["11am-12pm", "12pm-1pm", "1pm-2pm"]
FIRST_SLOT = TIME_SLOTS[0]
LAST_SLOT = TIME_SLOTS[-1]

SHIFT_DURATIONS: Dict[str, List[str]] = {
    "11-2pm": ["11am-12pm", "12pm-1pm", "1pm-2pm"],
    "11-1pm": ["11am-12pm", "12pm-1pm"],
    "12-2pm": ["12pm-1pm", "1pm-2pm"],
    "1-2pm": ["1pm-2pm"],
}
DEFAULT_SHIFT_DURATION = "11-2pm"

# ---------------------------------------------------------------------------
# Position catalog
# ---------------------------------------------------------------------------
ALL_POSITIONS = [  # Catalog/display order (second instances follow their primary)
    "Grill 1",
    "Grill 2",
    "P.O.S.",
    "Expo 1",
    "Expo 2",
    "Fries",
    "Lobby/Dish 1",
    "Lobby/Dish 2",
]

POSITION_PRIORITY = [  # Order positions are switched on as headcount grows
    "P.O.S.",
    "Grill 1",
    "Expo 1",
    "Fries",
    "Expo 2",
    "Lobby/Dish 1",
    "Grill 2",
    "Lobby/Dish 2",
]

ESSENTIAL_POSITIONS = ["P.O.S.", "Grill 1", "Expo 1", "Fries", "Expo 2"]

HOT_POSITION_TYPES: Dict[str, str] = {  # Hazardous station -> hazard type
    "Grill 1": "Grill",
    "Grill 2": "Grill",
    "Fries": "Fries",
}
HOT_POSITIONS = list(HOT_POSITION_TYPES)

SECOND_GRILL = "Grill 2"  # Dropped in one-griller mode and in the last slot

CANONICAL_POSITIONS: Dict[str, str] = {  # Second instances share the primary's preference
    "Grill 2": "Grill 1",
    "Lobby/Dish 2": "Lobby/Dish 1",
}
PREFERENCE_POSITIONS = [p for p in ALL_POSITIONS if p not in CANONICAL_POSITIONS]

# ---------------------------------------------------------------------------
# Staff defaults
# ---------------------------------------------------------------------------
MIN_HEADCOUNT = 5  # Fewer people than this cannot cover the essential stations

SENIORITY_RANKS: Dict[str, int] = {  # Lower rank = more senior
    "GM": 1,
    "AGM": 2,
    "Captain": 3,
    "Team Member": 4,
}
DEFAULT_SENIORITY = "Team Member"

NEUTRAL_PREFERENCE = 3
MIN_PREFERENCE = 1
MAX_PREFERENCE = 5

# ---------------------------------------------------------------------------
# History + output
# ---------------------------------------------------------------------------
HISTORY_WINDOW_DAYS = 7
DEFAULT_HISTORY_PATH = "schedule_history.json"
UNFILLED_LABEL = "UNFILLED"


@dataclass(frozen=True)
class ScoreWeights:
    """Scalar weights applied to each component of a candidate's score."""

    variety_bonus: float = 2.0
    history_penalty: float = 0.5  # Per time worked in the trailing window
    same_slot_yesterday_penalty: float = 500.0
    hot_repeat_base: float = 1000.0  # Second hot station of the day
    hot_repeat_seniority_step: float = 50.0  # Subtracted per rank above the newest tier plus one (GM 800 ... Team Member 950)
    hot_same_type_penalty: float = 500.0  # Added when the hazard type repeats


SCORE_WEIGHTS = ScoreWeights()
