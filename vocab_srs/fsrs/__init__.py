"""
FSRS - Phase-aware Spaced Repetition Scheduler

Main API for the vocabulary scheduler.

This module implements:
- A card lifecycle: NEW/LEARNING -> TRANSITION -> REVIEW
- Fixed preset intervals before graduation
- A memory model after graduation (Stability, Difficulty)
- Exponential forgetting curve: R = exp(-Δt/S)
- Interval solve for a target retention: t = -S * ln(R_target)

Quick start:
    from datetime import datetime, timezone
    from vocab_srs import fsrs

    card = fsrs.init_card()
    now = datetime.now(timezone.utc)

    # Show what each button would schedule
    options = fsrs.predict(card, now)

    # Apply the learner's choice (pure, nothing is stored)
    card, due, interval_days = fsrs.apply(card, fsrs.Rating.GOOD, now)
"""

# Core scheduler API (algorithm logic)
from vocab_srs.fsrs.scheduler import (
    apply,
    init_card,
    is_due,
    next_due,
    predict,
    retrievability,
)

# Types
from vocab_srs.fsrs.constants import Phase, Rating
from vocab_srs.fsrs.errors import InvalidRatingError, InvalidStateError, SchedulerError
from vocab_srs.fsrs.memory_state import CardState, ReviewEvent, ReviewSignals
from vocab_srs.fsrs.phases import ReviewOutcome
from vocab_srs.fsrs.predictor import PredictedOutcome, format_interval, quick_review_intervals

# Configuration
from vocab_srs.fsrs.config import (
    DEFAULT_CONFIG,
    PresetIntervals,
    SchedulerConfig,
    load_config,
)

# Collaborators
from vocab_srs.fsrs.clock import Clock, SimulatedClock, SystemClock
from vocab_srs.fsrs.ports import (
    CardStore,
    InMemoryCardStore,
    InMemoryReviewLedger,
    ReviewLedger,
    ReviewLogEntry,
)

# Database API
from vocab_srs.fsrs.database import (
    get_recent_reviews,
    init_db,
    is_test_mode,
    load_card_state,
    load_due_time,
    log_review,
    reset_db,
    save_card_state,
)
from vocab_srs.fsrs.scheduling import review_card, review_card_with
from vocab_srs.fsrs.simulator import ReviewSimulator


__all__ = [
    # Core algorithm
    "apply",
    "init_card",
    "is_due",
    "next_due",
    "predict",
    "retrievability",

    # Types
    "CardState",
    "Phase",
    "PredictedOutcome",
    "Rating",
    "ReviewEvent",
    "ReviewOutcome",
    "ReviewSignals",
    "format_interval",
    "quick_review_intervals",

    # Errors
    "InvalidRatingError",
    "InvalidStateError",
    "SchedulerError",

    # Configuration
    "DEFAULT_CONFIG",
    "PresetIntervals",
    "SchedulerConfig",
    "load_config",

    # Collaborators
    "CardStore",
    "Clock",
    "InMemoryCardStore",
    "InMemoryReviewLedger",
    "ReviewLedger",
    "ReviewLogEntry",
    "SimulatedClock",
    "SystemClock",

    # Database operations
    "get_recent_reviews",
    "init_db",
    "is_test_mode",
    "load_card_state",
    "load_due_time",
    "log_review",
    "reset_db",
    "review_card",
    "review_card_with",
    "save_card_state",

    # Simulation
    "ReviewSimulator",
]
