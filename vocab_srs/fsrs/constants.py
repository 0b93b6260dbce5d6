"""
FSRS Constants and Parameters

All fixed parameters of the scheduler in one place.
Tunable values (target retention, preset intervals, modifiers) live in
config.SchedulerConfig; the values here are the model's invariants.
"""

from __future__ import annotations

import math
from enum import Enum, IntEnum


# ---- Ratings ----

class Rating(IntEnum):
    """Learner feedback on a retrieval attempt."""
    AGAIN = 1   # Retrieval failed
    HARD = 2    # Retrieved with high effort
    GOOD = 3    # Retrieved normally
    EASY = 4    # Retrieved fluently


# ---- Card lifecycle ----

class Phase(str, Enum):
    """Lifecycle stage controlling which scheduling policy applies."""
    NEW = "new"                 # Never reviewed
    LEARNING = "learning"       # Fixed short learning steps
    TRANSITION = "transition"   # Passed learning once, not yet graduated
    REVIEW = "review"           # Scheduled by the memory model


# ---- Global Constants ----

S_MIN = 0.5      # Minimum stability (days)
D_MIN = 1.0      # Minimum difficulty
D_MAX = 10.0     # Maximum difficulty

INITIAL_STABILITY = 0.5   # S0 for a brand-new card (days)
INITIAL_DIFFICULTY = 5.0  # D0, middle of the 1-10 scale

SECONDS_PER_DAY = 86400.0


# ---- Interval solve ----

TARGET_RETENTION = 0.90           # Desired recall probability at the next review
MAX_INTERVAL_DAYS = 3650.0        # ~10 years
MIN_INTERVAL_DAYS = 1.0 / 1440.0  # 1 minute; sub-day intervals are allowed

# ln(0.9) ~= -0.10536, so the default interval is ~0.105 * S
DEFAULT_INTERVAL_FACTOR = -math.log(TARGET_RETENTION)


# ---- Difficulty Update by Rating ----
# Direction and magnitude of difficulty change

DIFFICULTY_DELTA = {
    Rating.AGAIN: +0.6,   # Failure increases difficulty
    Rating.HARD: +0.2,    # Hard success slightly increases difficulty
    Rating.GOOD: -0.3,    # Normal success decreases difficulty
    Rating.EASY: -0.5,    # Easy success decreases difficulty more
}


# ---- Stability Multiplier by Rating ----
# S_new = S_old * factor

STABILITY_FACTOR = {
    Rating.AGAIN: 0.50,   # Lapse: memory halved
    Rating.HARD: 1.20,    # Remembered but weak
    Rating.GOOD: 2.00,    # Remembered as expected
    Rating.EASY: 3.50,    # Very easy, large increase
}


# ---- Lapse (Again while in REVIEW) ----

LAPSE_DIFFICULTY_PENALTY = 1.0  # Fixed difficulty increase on a lapse
