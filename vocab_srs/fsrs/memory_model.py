"""
Memory Model - Stability and Difficulty Updates

Implements the adaptive part of the scheduler, used once a card has
graduated to the REVIEW phase (and to seed that phase on graduation).

Key principles:
- Difficulty moves by a fixed step per rating, clamped to [1, 10]
- Stability is multiplied by a per-rating factor
- Again in REVIEW is a lapse: a harsher, separate path
- The next interval is where the forgetting curve meets the target retention
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vocab_srs.fsrs.constants import (
    D_MAX,
    D_MIN,
    DIFFICULTY_DELTA,
    LAPSE_DIFFICULTY_PENALTY,
    MAX_INTERVAL_DAYS,
    MIN_INTERVAL_DAYS,
    S_MIN,
    SECONDS_PER_DAY,
    STABILITY_FACTOR,
    TARGET_RETENTION,
    Rating,
)
from vocab_srs.fsrs.math_utils import clamp
from vocab_srs.fsrs.memory_state import CardState, ReviewEvent
from vocab_srs.fsrs.modifiers import apply_behavior_modifiers

if TYPE_CHECKING:
    from vocab_srs.fsrs.config import SchedulerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryUpdate:
    """Result of one memory-model step."""
    stability: float
    difficulty: float
    interval_days: float
    lapse_count: int
    consecutive_fails: int


def update_difficulty(state: CardState, rating: Rating) -> float:
    """
    Update difficulty based on rating.

    Rules:
    - Again: +0.6
    - Hard:  +0.2
    - Good:  -0.3
    - Easy:  -0.5

    Returns:
        New difficulty, clipped to [1, 10]
    """
    return clamp(state.difficulty + DIFFICULTY_DELTA[rating], D_MIN, D_MAX)


def update_stability_base(
    state: CardState,
    rating: Rating,
    new_difficulty: float,
    scale_by_difficulty: bool = False
) -> float:
    """
    Base stability update.

    Formula: S_new = S_old * factor(rating)

    With scale_by_difficulty, growth is further multiplied by
    (11 - D_new) / 10 so that easier cards grow faster.

    Returns:
        New stability, floored at S_MIN
    """
    stability = state.stability * STABILITY_FACTOR[rating]

    if scale_by_difficulty:
        stability *= (11.0 - new_difficulty) / 10.0

    return max(S_MIN, stability)


def compute_next_interval_days(
    stability: float,
    target_retention: float = TARGET_RETENTION,
    max_interval: float = MAX_INTERVAL_DAYS,
    min_interval: float = MIN_INTERVAL_DAYS
) -> float:
    """
    Compute the next review interval in days.

    Solve exp(-t / S) = target_retention for t:
        t = -S * ln(target_retention)

    With target_retention = 0.9, ln(0.9) ~= -0.10536, so t ~= 0.105 * S.

    Returns:
        Interval in days, clamped to [min_interval, max_interval]
    """
    days = -stability * math.log(target_retention)
    return clamp(days, min_interval, max_interval)


def apply_lapse(state: CardState) -> tuple[float, float]:
    """
    Lapse path: Again while in REVIEW.

    Stability is halved (floor S_MIN) and difficulty rises by a fixed
    penalty instead of the normal Again step.

    Returns:
        (new_stability, new_difficulty)
    """
    new_stability = max(S_MIN, state.stability * STABILITY_FACTOR[Rating.AGAIN])
    new_difficulty = clamp(state.difficulty + LAPSE_DIFFICULTY_PENALTY, D_MIN, D_MAX)
    return new_stability, new_difficulty


def review_update(state: CardState, event: ReviewEvent, config: "SchedulerConfig") -> MemoryUpdate:
    """
    One REVIEW-phase step.

    Again goes through the lapse path with the configured relearn interval.
    Hard/Good/Easy update difficulty, then stability, then the optional
    behaviour modifiers, then solve the interval.
    """
    if event.rating == Rating.AGAIN:
        new_stability, new_difficulty = apply_lapse(state)
        logger.debug(
            "lapse #%d: S %.3f -> %.3f, D %.2f -> %.2f",
            state.lapse_count + 1, state.stability, new_stability,
            state.difficulty, new_difficulty,
        )
        return MemoryUpdate(
            stability=new_stability,
            difficulty=new_difficulty,
            interval_days=config.relearn_interval.total_seconds() / SECONDS_PER_DAY,
            lapse_count=state.lapse_count + 1,
            consecutive_fails=state.consecutive_fails + 1,
        )

    new_difficulty = update_difficulty(state, event.rating)
    new_stability = update_stability_base(
        state, event.rating, new_difficulty, config.scale_by_difficulty
    )
    if config.behavior_modifiers:
        new_stability = apply_behavior_modifiers(
            new_stability, event, config.behavior_modifiers
        )

    interval_days = compute_next_interval_days(
        new_stability,
        config.target_retention,
        config.max_interval_days,
        config.min_interval_days,
    )

    return MemoryUpdate(
        stability=new_stability,
        difficulty=new_difficulty,
        interval_days=interval_days,
        lapse_count=state.lapse_count,
        consecutive_fails=0,
    )
