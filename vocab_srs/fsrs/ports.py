"""
Ports (interfaces) for the scheduler's collaborators.

The core never stores anything; callers plug in a CardStore and a
ReviewLedger.

Implementations:
    - InMemoryCardStore / InMemoryReviewLedger: dict/list backed, for tests
      and the simulator
    - SqlCardStore / SqlReviewLedger (database.py): SQLAlchemy backed
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Protocol

from vocab_srs.fsrs.constants import Phase, Rating
from vocab_srs.fsrs.memory_state import CardState, ensure_utc


@dataclass(frozen=True)
class ReviewLogEntry:
    """One applied review, as appended to the ledger."""
    user_id: str
    vocab_id: str
    deck_id: Optional[str]
    rating: Rating
    phase: Phase  # Phase the card was in when rated
    timestamp: datetime

    @property
    def review_date(self) -> date:
        return self.timestamp.date()


class CardStore(Protocol):
    """
    Load/save CardState keyed by (user_id, vocab_id), with the due time
    apply() returned for it.

    Implementations must make load+save of one key atomic with respect to
    other writers of the same key.
    """

    def load(self, user_id: str, vocab_id: str) -> Optional[CardState]:
        ...

    def save(
        self,
        user_id: str,
        vocab_id: str,
        state: CardState,
        due: Optional[datetime] = None
    ) -> None:
        """Store the state; a due of None keeps the previously stored due time."""
        ...

    def due_for(self, user_id: str, vocab_id: str) -> Optional[datetime]:
        ...


class ReviewLedger(Protocol):
    """Append-only log of applied reviews."""

    def log_review(
        self,
        user_id: str,
        vocab_id: str,
        deck_id: Optional[str],
        rating: Rating,
        phase: Phase,
        timestamp: datetime
    ) -> None:
        ...


class InMemoryCardStore:
    def __init__(self):
        self._cards: dict[tuple[str, str], CardState] = {}
        self._due: dict[tuple[str, str], datetime] = {}

    def load(self, user_id: str, vocab_id: str) -> Optional[CardState]:
        return self._cards.get((user_id, vocab_id))

    def save(
        self,
        user_id: str,
        vocab_id: str,
        state: CardState,
        due: Optional[datetime] = None
    ) -> None:
        self._cards[(user_id, vocab_id)] = state
        if due is not None:
            self._due[(user_id, vocab_id)] = ensure_utc(due)

    def due_for(self, user_id: str, vocab_id: str) -> Optional[datetime]:
        return self._due.get((user_id, vocab_id))

    def __len__(self) -> int:
        return len(self._cards)


class InMemoryReviewLedger:
    def __init__(self):
        self.entries: list[ReviewLogEntry] = []

    def log_review(
        self,
        user_id: str,
        vocab_id: str,
        deck_id: Optional[str],
        rating: Rating,
        phase: Phase,
        timestamp: datetime
    ) -> None:
        self.entries.append(ReviewLogEntry(
            user_id=user_id,
            vocab_id=vocab_id,
            deck_id=deck_id,
            rating=Rating(rating),
            phase=Phase(phase),
            timestamp=ensure_utc(timestamp),
        ))

    def entries_for(self, user_id: str) -> list[ReviewLogEntry]:
        return [entry for entry in self.entries if entry.user_id == user_id]
