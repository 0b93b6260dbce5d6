"""
Math utilities for the forgetting curve.
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def retrievability(elapsed_days: float, stability: float) -> float:
    """
    Probability of successful recall after elapsed_days.

    Formula: R = exp(-Δt / S)

    Interpretation:
    - Immediately after review: R = 1.0
    - As time passes: R decays smoothly towards 0
    - Larger stability -> slower decay

    Args:
        elapsed_days: Days since the last review (negative values count as 0)
        stability: Current stability in days

    Returns:
        Retrievability between 0 and 1 (0.0 for a non-positive stability)
    """
    if stability <= 0:
        return 0.0

    return math.exp(-max(0.0, elapsed_days) / stability)
