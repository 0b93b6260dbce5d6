"""
Memory State - Card State, Review Events and Retrievability

Defines the per (user x card) memory state and the ephemeral review event
derived from it for every rating.

Key concepts:
- Stability (S): How slowly memory decays (in days)
- Difficulty (D): How hard the card is to learn (1-10 scale)
- Retrievability (R): Probability of successful recall at time t

All instants are timezone-aware UTC datetimes. A naive datetime is read as UTC.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from vocab_srs.fsrs.constants import (
    D_MAX,
    D_MIN,
    INITIAL_DIFFICULTY,
    INITIAL_STABILITY,
    S_MIN,
    SECONDS_PER_DAY,
    Phase,
    Rating,
)
from vocab_srs.fsrs.errors import InvalidRatingError, InvalidStateError
from vocab_srs.fsrs.math_utils import clamp, retrievability


@dataclass(frozen=True)
class CardState:
    """
    Memory state for a single (user, card) pair.

    Treated as an immutable value: every review produces a new CardState.
    """
    # Long-term memory parameters
    stability: float = INITIAL_STABILITY  # S, in days
    difficulty: float = INITIAL_DIFFICULTY  # D, range 1-10

    # Review tracking
    last_review_time: Optional[datetime] = None  # None = never reviewed
    lapse_count: int = 0  # Cumulative lapses, never decreases
    consecutive_fails: int = 0  # Current streak of Again ratings

    phase: Phase = Phase.NEW

    @property
    def is_new(self) -> bool:
        return self.last_review_time is None

    def evolve(self, **changes: Any) -> "CardState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_record(self) -> dict:
        """Plain dict for storage adapters."""
        return {
            "stability": self.stability,
            "difficulty": self.difficulty,
            "last_review_time": self.last_review_time,
            "lapse_count": self.lapse_count,
            "consecutive_fails": self.consecutive_fails,
            "phase": self.phase.value,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CardState":
        """
        Build a CardState from a stored record.

        Compatibility policy: values that are merely out of range (zero or
        negative stability, difficulty outside 1-10, negative counters) are
        clamped. A record without a phase is NEW if it was never reviewed
        and REVIEW otherwise.

        Raises:
            InvalidStateError: a field cannot be interpreted at all
        """
        try:
            stability = float(record.get("stability", INITIAL_STABILITY))
            difficulty = float(record.get("difficulty", INITIAL_DIFFICULTY))
            lapse_count = int(record.get("lapse_count") or 0)
            consecutive_fails = int(record.get("consecutive_fails") or 0)
        except (TypeError, ValueError) as exc:
            raise InvalidStateError(f"Malformed card record: {exc}") from exc

        last_review_time = _parse_timestamp(record.get("last_review_time"))

        raw_phase = record.get("phase")
        if raw_phase is None or raw_phase == "":
            phase = Phase.NEW if last_review_time is None else Phase.REVIEW
        else:
            try:
                phase = Phase(raw_phase)
            except ValueError as exc:
                raise InvalidStateError(f"Unknown phase {raw_phase!r}") from exc

        return normalize_state(cls(
            stability=stability,
            difficulty=difficulty,
            last_review_time=last_review_time,
            lapse_count=lapse_count,
            consecutive_fails=consecutive_fails,
            phase=phase,
        ))


@dataclass(frozen=True)
class ReviewSignals:
    """
    Optional behavioural observations attached to a single review.

    Only read by the behaviour modifiers; the base algorithm ignores them.
    """
    latency_ms: Optional[int] = None  # Time taken to answer
    skipped: bool = False  # Card was skipped at least once before answering
    recent_ratings: tuple[Rating, ...] = field(default_factory=tuple)  # Oldest first


@dataclass(frozen=True)
class ReviewEvent:
    """
    Pure function input derived from CardState + now + chosen rating.

    Never persisted as-is.
    """
    rating: Rating
    elapsed_days: float
    scheduled_interval_days: float
    consecutive_fails: int
    lapse_count: int
    hour_of_day: int
    signals: ReviewSignals = field(default_factory=ReviewSignals)


def initialize_new_card() -> CardState:
    """
    Initialize state for a new card (never seen before).

    Returns:
        CardState in phase NEW with S0 = 0.5 days and D0 = 5.0
    """
    return CardState(
        stability=INITIAL_STABILITY,
        difficulty=INITIAL_DIFFICULTY,
        last_review_time=None,
        lapse_count=0,
        consecutive_fails=0,
        phase=Phase.NEW,
    )


def normalize_state(state: CardState) -> CardState:
    """
    Clamp a possibly legacy state back into the model's invariants.

    Returns the same object when nothing needed fixing.
    """
    stability = state.stability
    if math.isnan(stability) or stability < S_MIN:
        stability = S_MIN

    difficulty = state.difficulty
    if math.isnan(difficulty):
        difficulty = INITIAL_DIFFICULTY
    difficulty = clamp(difficulty, D_MIN, D_MAX)

    last_review_time = state.last_review_time
    if last_review_time is not None:
        last_review_time = ensure_utc(last_review_time)

    fixed = {
        "stability": stability,
        "difficulty": difficulty,
        "last_review_time": last_review_time,
        "lapse_count": max(0, state.lapse_count),
        "consecutive_fails": max(0, state.consecutive_fails),
    }
    if all(getattr(state, name) == value for name, value in fixed.items()):
        return state
    return replace(state, **fixed)


def coerce_rating(value: Any) -> Rating:
    """
    Validate a rating at the boundary.

    Raises:
        InvalidRatingError: value is not one of 1, 2, 3, 4
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRatingError(value)
    try:
        return Rating(value)
    except ValueError:
        raise InvalidRatingError(value) from None


def ensure_utc(timestamp: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def get_elapsed_days(state: CardState, now: datetime) -> float:
    """
    Days since the last review, floored at 0.

    Returns 0 for a card that was never reviewed.
    """
    if state.last_review_time is None:
        return 0.0

    delta = ensure_utc(now) - ensure_utc(state.last_review_time)
    return max(0.0, delta.total_seconds() / SECONDS_PER_DAY)


def calculate_retrievability(state: CardState, now: datetime) -> float:
    """
    Current retrievability of a card.

    A never-reviewed card is treated as perfectly recalled (R = 1.0).
    """
    if state.last_review_time is None:
        return 1.0
    return retrievability(get_elapsed_days(state, now), state.stability)


def build_review_event(
    state: CardState,
    rating: Rating,
    now: datetime,
    target_retention: float,
    signals: Optional[ReviewSignals] = None,
    hour_of_day: Optional[int] = None
) -> ReviewEvent:
    """
    Derive the ReviewEvent for one rating.

    The scheduled interval is what the interval solve gave at the last
    review; it is recomputed from the stored stability, not stored.

    hour_of_day defaults to now.hour. apply_review passes the hour of the
    datetime it was given, so a caller in UTC+9 gets its own night hours.
    """
    scheduled = 0.0
    if state.last_review_time is not None and state.stability > 0:
        scheduled = -state.stability * math.log(target_retention)

    return ReviewEvent(
        rating=rating,
        elapsed_days=get_elapsed_days(state, now),
        scheduled_interval_days=scheduled,
        consecutive_fails=state.consecutive_fails,
        lapse_count=state.lapse_count,
        hour_of_day=now.hour if hour_of_day is None else hour_of_day,
        signals=signals or ReviewSignals(),
    )


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value))
        except ValueError as exc:
            raise InvalidStateError(f"Malformed last_review_time {value!r}") from exc
    raise InvalidStateError(
        f"last_review_time must be a datetime or ISO string, got {type(value).__name__}"
    )
