"""
Scheduler - Public API

Pure scheduling functions (no database calls).

Main workflow:
1. Caller loads the card state (or init_card() for a new card)
2. predict() shows what each rating would schedule
3. Learner picks a rating
4. apply() returns the new state, due time and interval
5. Caller saves the state and logs the review

Storage and review logging are the caller's responsibility
(see vocab_srs.fsrs.database and vocab_srs.fsrs.scheduling).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from vocab_srs.fsrs.config import DEFAULT_CONFIG, SchedulerConfig
from vocab_srs.fsrs.constants import TARGET_RETENTION, Rating
from vocab_srs.fsrs.memory_model import compute_next_interval_days
from vocab_srs.fsrs.memory_state import (
    CardState,
    ReviewSignals,
    calculate_retrievability,
    ensure_utc,
    initialize_new_card,
    normalize_state,
)
from vocab_srs.fsrs.phases import ReviewOutcome, apply_review
from vocab_srs.fsrs.predictor import PredictedOutcome, predict_all


def init_card() -> CardState:
    """New card state: phase NEW, default stability and difficulty."""
    return initialize_new_card()


def predict(
    state: Optional[CardState],
    now: datetime,
    config: Optional[SchedulerConfig] = None,
    signals: Optional[ReviewSignals] = None
) -> dict[Rating, PredictedOutcome]:
    """
    Expected outcome of each rating, without committing.

    Args:
        state: Current state, or None for a brand-new card
        now: Current time
        config: Scheduler configuration (default: DEFAULT_CONFIG)
        signals: The signals apply() will get, so modifiers see the same input

    Returns:
        {Rating.AGAIN: outcome, ..., Rating.EASY: outcome}; keys compare
        equal to the ints 1-4
    """
    if state is None:
        state = init_card()
    return predict_all(state, now, config or DEFAULT_CONFIG, signals)


def apply(
    state: Optional[CardState],
    rating: int,
    now: datetime,
    config: Optional[SchedulerConfig] = None,
    signals: Optional[ReviewSignals] = None
) -> ReviewOutcome:
    """
    Apply a rating and return (new_state, due, interval_days).

    Args:
        state: Current state, or None for a brand-new card
        rating: 1=Again, 2=Hard, 3=Good, 4=Easy
        now: Review time
        config: Scheduler configuration (default: DEFAULT_CONFIG)
        signals: Optional behavioural signals (used only by modifiers)

    Raises:
        InvalidRatingError: rating is not one of 1-4
    """
    if state is None:
        state = init_card()
    return apply_review(state, rating, now, config or DEFAULT_CONFIG, signals)


def retrievability(state: CardState, now: datetime) -> float:
    """
    Current probability of recall, in [0, 1].

    A never-reviewed card returns 1.0.
    """
    return calculate_retrievability(normalize_state(state), now)


def is_due(
    state: CardState,
    now: datetime,
    target_retention: float = TARGET_RETENTION,
    due: Optional[datetime] = None
) -> bool:
    """
    Check if a card should be reviewed now.

    With the due time apply() returned (and the caller stored), the card is
    due once now reaches it. Pass it whenever it is known: preset steps,
    graduation and lapses schedule by fixed intervals that the forgetting
    curve does not reproduce.

    Without it, new cards are always due and reviewed cards are due once
    retrievability has dropped to the target retention (see next_due).
    """
    if due is not None:
        return ensure_utc(now) >= ensure_utc(due)
    if state.last_review_time is None:
        return True
    return retrievability(state, now) <= target_retention


def next_due(
    state: CardState,
    config: Optional[SchedulerConfig] = None
) -> Optional[datetime]:
    """
    Memory-model due time: when retrievability reaches the target retention.

    This is the moment is_due() without a stored due time flips to True.
    It equals apply()'s due only after a Hard/Good/Easy review in REVIEW.
    After a learning or transition step, a graduation or a lapse, apply()
    used a preset or relearn interval instead, and that due time is the
    one to store and pass to is_due().

    Returns:
        Due time in UTC, or None for a never-reviewed card (always due)
    """
    if state.last_review_time is None:
        return None

    config = config or DEFAULT_CONFIG
    state = normalize_state(state)
    days = compute_next_interval_days(
        state.stability,
        config.target_retention,
        config.max_interval_days,
        config.min_interval_days,
    )
    return state.last_review_time + timedelta(days=days)
