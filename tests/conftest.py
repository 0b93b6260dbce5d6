from datetime import datetime, timedelta, timezone

import pytest

from vocab_srs import fsrs
from vocab_srs.fsrs import CardState, Phase


@pytest.fixture
def now():
    """Fixed review time used across tests."""
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def review_card_state(now):
    """A graduated card last seen one day ago."""
    return CardState(
        stability=10.0,
        difficulty=5.0,
        last_review_time=now - timedelta(days=1),
        lapse_count=0,
        consecutive_fails=0,
        phase=Phase.REVIEW,
    )


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    """Points DATABASE_URL at a fresh SQLite file and creates the tables."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'learning_db.sqlite'}")
    monkeypatch.delenv("TEST_MODE", raising=False)
    fsrs.init_db()
    return tmp_path
