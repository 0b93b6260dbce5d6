"""
Scheduler exceptions.
"""

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class InvalidRatingError(SchedulerError, ValueError):
    """Raised when a rating is not one of Again(1), Hard(2), Good(3), Easy(4)."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"Invalid rating {rating!r}: expected one of 1, 2, 3, 4")


class InvalidStateError(SchedulerError, ValueError):
    """
    Raised when a stored card record cannot be interpreted at all.

    Out-of-range numbers are never reported through this error; they are
    clamped on read so that legacy states stay loadable.
    """
