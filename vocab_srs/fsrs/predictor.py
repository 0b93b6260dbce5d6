"""
Interval Predictor

Shows, for each of the four ratings, when the card would be due, without
committing anything. Prediction is a dry run of apply_review, so what the
learner sees on a button is exactly what pressing it schedules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from vocab_srs.fsrs.config import DEFAULT_CONFIG, SchedulerConfig
from vocab_srs.fsrs.constants import Phase, Rating
from vocab_srs.fsrs.memory_state import CardState, ReviewSignals
from vocab_srs.fsrs.phases import apply_review


@dataclass(frozen=True)
class PredictedOutcome:
    days: float
    due: datetime

    @property
    def label(self) -> str:
        return format_interval(timedelta(days=self.days))


def predict_all(
    state: CardState,
    now: datetime,
    config: SchedulerConfig = DEFAULT_CONFIG,
    signals: Optional[ReviewSignals] = None
) -> dict[Rating, PredictedOutcome]:
    """
    Predict the outcome of every rating.

    signals must be the ones apply_review will receive; signal-reading
    modifiers would otherwise preview a different stability.

    Returns:
        Mapping Rating -> PredictedOutcome(days, due), Again through Easy
    """
    predictions = {}
    for rating in Rating:
        outcome = apply_review(state, rating, now, config, signals)
        predictions[rating] = PredictedOutcome(days=outcome.interval_days, due=outcome.due)
    return predictions


def quick_review_intervals(
    state: CardState,
    now: datetime,
    config: SchedulerConfig = DEFAULT_CONFIG
) -> dict[Rating, float]:
    """
    Presentational shortcut for REVIEW-phase buttons.

    Only Good is simulated; Hard = 0.5x and Easy = 2x of it, each floored at
    one day. This is NOT what apply_review schedules; use predict_all when
    the numbers must match.

    Returns:
        Mapping Hard/Good/Easy -> days (empty outside the REVIEW phase)
    """
    if state.phase != Phase.REVIEW:
        return {}

    good = apply_review(state, Rating.GOOD, now, config).interval_days
    return {
        Rating.HARD: max(1.0, good * 0.5),
        Rating.GOOD: max(1.0, good),
        Rating.EASY: max(1.0, good * 2.0),
    }


def format_interval(interval: timedelta) -> str:
    """
    Human-readable interval for rating buttons.

    Examples: "1 min", "10 mins", "3 hours", "2 days", "2.5 months", "1 year"
    """
    seconds = interval.total_seconds()
    if seconds < 60:
        return "< 1 min"

    minutes = seconds / 60
    if round(minutes) < 60:
        return _plural(round(minutes), "min")

    hours = minutes / 60
    if round(hours) < 24:
        return _plural(round(hours), "hour")

    days = hours / 24
    if days < 30:
        return _plural(round(days, 1), "day")
    if days < 365:
        return _plural(round(days / 30, 1), "month")
    return _plural(round(days / 365, 1), "year")


def _plural(value: float, unit: str) -> str:
    if value == int(value):
        value = int(value)
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"
