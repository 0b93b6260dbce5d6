"""
Review Simulator

Lets a developer rate one dummy card over and over and watch how stability,
difficulty and intervals evolve. After each rating, simulated time jumps to
the moment the card becomes due, so the next rating happens "on time".

State, history and time all live on the simulator object; nothing is global.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from vocab_srs.fsrs.clock import SimulatedClock
from vocab_srs.fsrs.config import DEFAULT_CONFIG, SchedulerConfig
from vocab_srs.fsrs.constants import Phase, Rating
from vocab_srs.fsrs.memory_state import (
    CardState,
    calculate_retrievability,
    coerce_rating,
    get_elapsed_days,
    initialize_new_card,
)
from vocab_srs.fsrs.phases import apply_review
from vocab_srs.fsrs.predictor import PredictedOutcome, predict_all


@dataclass(frozen=True)
class HistoryEntry:
    """One simulated review, as shown in the history table."""
    timestamp: datetime
    rating: Rating
    phase_before: Phase
    phase_after: Phase
    stability_before: float
    stability_after: float
    difficulty_before: float
    difficulty_after: float
    retrievability: float  # Before the review
    next_interval_days: float
    elapsed_days: float


class ReviewSimulator:
    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        start: Optional[datetime] = None
    ):
        self.config = config or DEFAULT_CONFIG
        self.clock = SimulatedClock(start)
        self.state: CardState = initialize_new_card()
        self.history: list[HistoryEntry] = []

    def now(self) -> datetime:
        return self.clock.now()

    def retrievability(self) -> float:
        return calculate_retrievability(self.state, self.now())

    def predictions(self) -> dict[Rating, PredictedOutcome]:
        return predict_all(self.state, self.now(), self.config)

    def review(self, rating: int) -> HistoryEntry:
        """
        Apply a rating at the current simulated time, then jump to the due time.

        Raises:
            InvalidRatingError: rating is not one of 1-4
        """
        rating = coerce_rating(rating)
        now = self.now()
        before = self.state

        outcome = apply_review(before, rating, now, self.config)

        entry = HistoryEntry(
            timestamp=now,
            rating=rating,
            phase_before=before.phase,
            phase_after=outcome.state.phase,
            stability_before=before.stability,
            stability_after=outcome.state.stability,
            difficulty_before=before.difficulty,
            difficulty_after=outcome.state.difficulty,
            retrievability=calculate_retrievability(before, now),
            next_interval_days=outcome.interval_days,
            elapsed_days=get_elapsed_days(before, now),
        )

        self.state = outcome.state
        self.history.append(entry)
        self.clock.set(outcome.due)
        return entry

    def reset(self) -> None:
        """Fresh card, empty history, real time."""
        self.state = initialize_new_card()
        self.history = []
        self.clock.reset()
