"""
SQLAlchemy ORM Models for the scheduler's storage adapter

Defines the card_state and review_log tables used by database.py.
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CardStateRecord(Base):
    """
    Persistent memory state for a single (user, vocab) pair.
    """
    __tablename__ = 'card_state'

    # Primary key: composite of user_id and vocab_id
    user_id = Column(String(255), primary_key=True, nullable=False)
    vocab_id = Column(String(255), primary_key=True, nullable=False)

    # Memory model parameters
    stability = Column(Float, nullable=False)  # Days
    difficulty = Column(Float, nullable=False)  # 1-10

    # Review tracking
    last_review_time = Column(DateTime(timezone=True), nullable=True)  # NULL = never reviewed
    lapse_count = Column(Integer, nullable=False, default=0)
    consecutive_fails = Column(Integer, nullable=False, default=0)
    phase = Column(String(20), nullable=False)

    # Next due time as scheduled by the last review
    due_time = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<CardStateRecord({self.user_id}, {self.vocab_id}, {self.phase})>"


class ReviewLogRecord(Base):
    """
    Append-only log entry for one applied review.

    Consumed outside the scheduler for streaks and heatmaps.
    """
    __tablename__ = 'review_log'

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(String(255), nullable=False)
    vocab_id = Column(String(255), nullable=False)
    deck_id = Column(String(255), nullable=True)

    rating = Column(Integer, nullable=False)  # 1=AGAIN, 2=HARD, 3=GOOD, 4=EASY
    phase = Column(String(20), nullable=False)  # Phase when rated
    timestamp = Column(DateTime(timezone=True), nullable=False)
    review_date = Column(String(10), nullable=False)  # YYYY-MM-DD (UTC)

    # State before/after, optional
    stability_before = Column(Float, nullable=True)
    stability_after = Column(Float, nullable=True)
    difficulty_before = Column(Float, nullable=True)
    difficulty_after = Column(Float, nullable=True)
    retrievability_before = Column(Float, nullable=True)
    interval_days = Column(Float, nullable=True)

    __table_args__ = (
        Index('idx_review_log_user_date', 'user_id', 'review_date'),
    )

    def __repr__(self):
        return f"<ReviewLogRecord(id={self.id}, {self.user_id}/{self.vocab_id}, rating={self.rating})>"
