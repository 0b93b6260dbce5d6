"""
Behaviour Modifiers

Optional multiplicative adjustments applied to stability after the base
update of a successful REVIEW-phase rating.

Each modifier is a pure function (stability, event) -> stability. A chain is
an ordered tuple of modifier names, composed left to right. With an empty
chain (the default) the scheduler runs the plain algorithm.

Modifiers read the counters copied into the ReviewEvent and the optional
ReviewSignals. A modifier whose signal is missing returns stability unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from vocab_srs.fsrs.constants import S_MIN, Rating
from vocab_srs.fsrs.math_utils import clamp, lerp
from vocab_srs.fsrs.memory_state import ReviewEvent

logger = logging.getLogger(__name__)

Modifier = Callable[[float, ReviewEvent], float]


# ---- Parameters ----

FAST_RESPONSE_MS = 3000      # Answers faster than this are fluent
SLOW_RESPONSE_MS = 15000     # Answers slower than this were effortful
FAST_RESPONSE_BONUS = 1.10
SLOW_RESPONSE_PENALTY = 0.85

LATE_BONUS_MAX = 1.20        # Recall well past the scheduled time
EARLY_FACTOR_MIN = 0.90      # Review right after the previous one

FAIL_STREAK_DECAY = 0.85     # Per consecutive fail
LAPSE_DECAY = 0.10           # 1 / (1 + 0.1 * lapses)

CONSISTENCY_WINDOW = 3
CONSISTENCY_BONUS = 1.10
SKIP_PENALTY = 0.90
NIGHT_HOURS = range(0, 5)
NIGHT_PENALTY = 0.95
TREND_FACTOR = 0.05


def response_time_modifier(stability: float, event: ReviewEvent) -> float:
    """Fluent answers grow stability more, slow answers less."""
    latency = event.signals.latency_ms
    if latency is None:
        return stability
    if latency < FAST_RESPONSE_MS:
        return stability * FAST_RESPONSE_BONUS
    if latency > SLOW_RESPONSE_MS:
        return stability * SLOW_RESPONSE_PENALTY
    return stability


def lateness_modifier(stability: float, event: ReviewEvent) -> float:
    """
    Scale by how late or early the review happened.

    ratio = elapsed / scheduled
    - ratio < 1 (early): lerp from 0.9 up to 1.0
    - ratio > 1 (late):  up to +20%, reached at three times the interval
    """
    if event.scheduled_interval_days <= 0:
        return stability

    ratio = event.elapsed_days / event.scheduled_interval_days
    if ratio < 1.0:
        return stability * lerp(EARLY_FACTOR_MIN, 1.0, ratio)

    t = clamp((ratio - 1.0) / 2.0, 0.0, 1.0)
    return stability * lerp(1.0, LATE_BONUS_MAX, t)


def consecutive_fails_modifier(stability: float, event: ReviewEvent) -> float:
    """0.85 ** fails: recovering from a fail streak grows slower."""
    return stability * FAIL_STREAK_DECAY ** event.consecutive_fails


def lapse_count_modifier(stability: float, event: ReviewEvent) -> float:
    """1 / (1 + 0.1 * lapses): leech cards grow slower."""
    return stability / (1.0 + LAPSE_DECAY * event.lapse_count)


def consistency_modifier(stability: float, event: ReviewEvent) -> float:
    """Bonus when the last few ratings were all Good or Easy."""
    recent = event.signals.recent_ratings[-CONSISTENCY_WINDOW:]
    if len(recent) < CONSISTENCY_WINDOW:
        return stability
    if all(rating >= Rating.GOOD for rating in recent):
        return stability * CONSISTENCY_BONUS
    return stability


def skip_modifier(stability: float, event: ReviewEvent) -> float:
    if event.signals.skipped:
        return stability * SKIP_PENALTY
    return stability


def time_of_day_modifier(stability: float, event: ReviewEvent) -> float:
    """Late-night reviews are trusted slightly less."""
    if event.hour_of_day in NIGHT_HOURS:
        return stability * NIGHT_PENALTY
    return stability


def trend_modifier(stability: float, event: ReviewEvent) -> float:
    """
    Compare the mean rating of the newer half of recent ratings to the older half.

    Improving -> +5%, declining -> -5%.
    """
    recent = event.signals.recent_ratings
    if len(recent) < 2:
        return stability

    half = len(recent) // 2
    older = recent[:half]
    newer = recent[len(recent) - half:]
    delta = sum(newer) / len(newer) - sum(older) / len(older)

    if delta > 0:
        return stability * (1.0 + TREND_FACTOR)
    if delta < 0:
        return stability * (1.0 - TREND_FACTOR)
    return stability


MODIFIERS: dict[str, Modifier] = {
    "response_time": response_time_modifier,
    "lateness": lateness_modifier,
    "consecutive_fails": consecutive_fails_modifier,
    "lapse_count": lapse_count_modifier,
    "consistency": consistency_modifier,
    "skip": skip_modifier,
    "time_of_day": time_of_day_modifier,
    "trend": trend_modifier,
}


def apply_behavior_modifiers(
    stability: float,
    event: ReviewEvent,
    names: Sequence[str]
) -> float:
    """
    Run the named modifiers left to right.

    Args:
        stability: Stability after the base update
        event: ReviewEvent of the current review
        names: Modifier names, validated by SchedulerConfig

    Returns:
        Adjusted stability, floored at S_MIN
    """
    for name in names:
        before = stability
        stability = MODIFIERS[name](stability, event)
        if stability != before:
            logger.debug("modifier %s: %.4f -> %.4f", name, before, stability)

    return max(S_MIN, stability)
