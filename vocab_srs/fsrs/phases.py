"""
Phase State Machine

Routes a rating to either the fixed preset intervals (NEW/LEARNING and
TRANSITION) or the memory model (REVIEW), and decides phase transitions.

    State         Rating       Next
    NEW/LEARNING  Again, Hard  LEARNING
    NEW/LEARNING  Good         TRANSITION
    NEW/LEARNING  Easy         REVIEW (graduate)
    TRANSITION    Again        LEARNING (counts as a lapse)
    TRANSITION    Hard         TRANSITION
    TRANSITION    Good, Easy   REVIEW (graduate)
    REVIEW        any          REVIEW

Difficulty takes its rating step in every phase. On graduation the memory
model is seeded with stability = graduating interval in days.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from vocab_srs.fsrs.config import DEFAULT_CONFIG, PresetIntervals, SchedulerConfig
from vocab_srs.fsrs.constants import S_MIN, SECONDS_PER_DAY, Phase, Rating
from vocab_srs.fsrs.memory_model import review_update, update_difficulty
from vocab_srs.fsrs.memory_state import (
    CardState,
    ReviewSignals,
    build_review_event,
    coerce_rating,
    ensure_utc,
    normalize_state,
)

logger = logging.getLogger(__name__)


class ReviewOutcome(NamedTuple):
    """Result of applying one rating: (state, due, interval_days)."""
    state: CardState
    due: datetime
    interval_days: float


def apply_review(
    state: CardState,
    rating: int,
    now: datetime,
    config: SchedulerConfig = DEFAULT_CONFIG,
    signals: Optional[ReviewSignals] = None
) -> ReviewOutcome:
    """
    Apply a rating to a card.

    Pure: the input state is never modified and identical inputs give
    identical outputs.

    Args:
        state: Current card state (legacy values are clamped first)
        rating: 1=Again, 2=Hard, 3=Good, 4=Easy
        now: Review time
        config: Scheduler configuration
        signals: Optional behavioural signals for the modifier chain

    Returns:
        ReviewOutcome(new_state, due, interval_days)

    Raises:
        InvalidRatingError: rating is not one of 1-4
    """
    rating = coerce_rating(rating)
    state = normalize_state(state)
    hour_of_day = now.hour  # Caller's wall clock, read before the UTC conversion
    now = ensure_utc(now)

    if state.phase in (Phase.NEW, Phase.LEARNING):
        outcome = _learning_step(state, rating, now, config.learning)
    elif state.phase == Phase.TRANSITION:
        outcome = _transition_step(state, rating, now, config.transition)
    else:
        outcome = _review_step(state, rating, now, config, signals, hour_of_day)

    if outcome.state.phase != state.phase:
        logger.debug(
            "phase %s -> %s on %s", state.phase.value, outcome.state.phase.value, rating.name
        )
    return outcome


def _learning_step(
    state: CardState,
    rating: Rating,
    now: datetime,
    presets: PresetIntervals
) -> ReviewOutcome:
    interval = presets.for_rating(rating)
    difficulty = update_difficulty(state, rating)

    if rating == Rating.AGAIN:
        new_state = state.evolve(
            difficulty=difficulty,
            consecutive_fails=state.consecutive_fails + 1,
            last_review_time=now,
            phase=Phase.LEARNING,
        )
    elif rating == Rating.HARD:
        new_state = state.evolve(
            difficulty=difficulty,
            consecutive_fails=0,
            last_review_time=now,
            phase=Phase.LEARNING,
        )
    elif rating == Rating.GOOD:
        # Placeholder stability until the card graduates
        new_state = state.evolve(
            stability=max(S_MIN, _days(interval)),
            difficulty=difficulty,
            consecutive_fails=0,
            last_review_time=now,
            phase=Phase.TRANSITION,
        )
    else:
        new_state = _graduate(state, difficulty, interval, now)

    return _preset_outcome(new_state, now, interval)


def _transition_step(
    state: CardState,
    rating: Rating,
    now: datetime,
    presets: PresetIntervals
) -> ReviewOutcome:
    interval = presets.for_rating(rating)
    difficulty = update_difficulty(state, rating)

    if rating == Rating.AGAIN:
        new_state = state.evolve(
            difficulty=difficulty,
            lapse_count=state.lapse_count + 1,
            consecutive_fails=state.consecutive_fails + 1,
            last_review_time=now,
            phase=Phase.LEARNING,
        )
    elif rating == Rating.HARD:
        new_state = state.evolve(
            difficulty=difficulty,
            consecutive_fails=0,
            last_review_time=now,
            phase=Phase.TRANSITION,
        )
    else:
        new_state = _graduate(state, difficulty, interval, now)

    return _preset_outcome(new_state, now, interval)


def _review_step(
    state: CardState,
    rating: Rating,
    now: datetime,
    config: SchedulerConfig,
    signals: Optional[ReviewSignals],
    hour_of_day: int
) -> ReviewOutcome:
    event = build_review_event(
        state, rating, now, config.target_retention, signals, hour_of_day=hour_of_day
    )
    update = review_update(state, event, config)

    new_state = state.evolve(
        stability=update.stability,
        difficulty=update.difficulty,
        lapse_count=update.lapse_count,
        consecutive_fails=update.consecutive_fails,
        last_review_time=now,
        phase=Phase.REVIEW,
    )
    return ReviewOutcome(new_state, now + timedelta(days=update.interval_days), update.interval_days)


def _graduate(
    state: CardState,
    difficulty: float,
    interval: timedelta,
    now: datetime
) -> CardState:
    """Seed the memory model; the lapse count is carried over."""
    return state.evolve(
        stability=max(S_MIN, _days(interval)),
        difficulty=difficulty,
        consecutive_fails=0,
        last_review_time=now,
        phase=Phase.REVIEW,
    )


def _preset_outcome(new_state: CardState, now: datetime, interval: timedelta) -> ReviewOutcome:
    return ReviewOutcome(new_state, now + interval, _days(interval))


def _days(interval: timedelta) -> float:
    return interval.total_seconds() / SECONDS_PER_DAY
