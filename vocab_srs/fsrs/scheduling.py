"""
Scheduling - Review Orchestration

Ties the pure scheduler to its collaborators.

Main workflow:
1. Load card state (or initialize new card)
2. Apply the rating
3. Save state
4. Append the review to the ledger
"""

from __future__ import annotations

import logging
from typing import Optional

from vocab_srs.fsrs import database
from vocab_srs.fsrs.clock import Clock, SystemClock
from vocab_srs.fsrs.config import DEFAULT_CONFIG, SchedulerConfig
from vocab_srs.fsrs.memory_state import (
    CardState,
    ReviewSignals,
    calculate_retrievability,
    coerce_rating,
    initialize_new_card,
)
from vocab_srs.fsrs.phases import ReviewOutcome, apply_review
from vocab_srs.fsrs.ports import CardStore, ReviewLedger

logger = logging.getLogger(__name__)


def review_card(
    user_id: str,
    vocab_id: str,
    deck_id: Optional[str],
    rating: int,
    clock: Optional[Clock] = None,
    config: Optional[SchedulerConfig] = None,
    signals: Optional[ReviewSignals] = None
) -> ReviewOutcome:
    """
    Apply a review and persist it in the database, in one transaction.

    The card row is selected FOR UPDATE, so two concurrent reviews of the
    same (user, card) are serialized on databases that support row locks.

    Args:
        user_id: User identifier
        vocab_id: Vocabulary item identifier
        deck_id: Deck the review happened in (for the log only)
        rating: 1=Again, 2=Hard, 3=Good, 4=Easy
        clock: Time source (defaults to SystemClock)
        config: Scheduler configuration
        signals: Optional behavioural signals

    Returns:
        ReviewOutcome(new_state, due, interval_days)

    Raises:
        InvalidRatingError: rating is not one of 1-4 (nothing is written)
    """
    rating = coerce_rating(rating)
    now = (clock or SystemClock()).now()

    session = database.get_session()
    try:
        card = database.load_card_state(user_id, vocab_id, session=session, lock=True)
        if card is None:
            card = initialize_new_card()

        outcome = apply_review(card, rating, now, config or DEFAULT_CONFIG, signals)

        database.save_card_state(
            user_id, vocab_id, outcome.state, due_time=outcome.due, session=session
        )
        database.log_review(
            user_id, vocab_id, deck_id, rating, card.phase, now,
            session=session,
            **_log_details(card, outcome, now)
        )
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.debug(
        "user=%s vocab=%s rating=%s -> %s due %s",
        user_id, vocab_id, rating.name, outcome.state.phase.value, outcome.due.isoformat(),
    )
    return outcome


def review_card_with(
    store: CardStore,
    ledger: ReviewLedger,
    user_id: str,
    vocab_id: str,
    deck_id: Optional[str],
    rating: int,
    clock: Optional[Clock] = None,
    config: Optional[SchedulerConfig] = None,
    signals: Optional[ReviewSignals] = None
) -> ReviewOutcome:
    """
    Same flow as review_card against any CardStore/ReviewLedger pair.

    Mutual exclusion per (user, card) is the store's responsibility.
    """
    rating = coerce_rating(rating)
    now = (clock or SystemClock()).now()

    card = store.load(user_id, vocab_id) or initialize_new_card()
    outcome = apply_review(card, rating, now, config or DEFAULT_CONFIG, signals)

    store.save(user_id, vocab_id, outcome.state, outcome.due)
    ledger.log_review(user_id, vocab_id, deck_id, rating, card.phase, now)
    return outcome


def _log_details(card: CardState, outcome: ReviewOutcome, now) -> dict:
    return {
        "stability_before": card.stability,
        "stability_after": outcome.state.stability,
        "difficulty_before": card.difficulty,
        "difficulty_after": outcome.state.difficulty,
        "retrievability_before": calculate_retrievability(card, now),
        "interval_days": outcome.interval_days,
    }
