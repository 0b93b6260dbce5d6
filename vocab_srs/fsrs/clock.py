"""
Injectable clocks.

The core takes `now` as an argument; clocks are for callers that need to
control where `now` comes from (a simulation harness, tests).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol

from vocab_srs.fsrs.memory_state import ensure_utc


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Real wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class SimulatedClock:
    """
    Overridable clock.

    Falls back to real time until a time is set; once set, time only moves
    when advanced explicitly.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._current = ensure_utc(start) if start is not None else None

    @property
    def is_simulated(self) -> bool:
        return self._current is not None

    def now(self) -> datetime:
        if self._current is None:
            return datetime.now(timezone.utc)
        return self._current

    def set(self, timestamp: datetime) -> None:
        self._current = ensure_utc(timestamp)

    def advance(self, delta: timedelta) -> datetime:
        """Move simulated time forward, starting from real time if unset."""
        self._current = self.now() + delta
        return self._current

    def reset(self) -> None:
        """Go back to real time."""
        self._current = None
