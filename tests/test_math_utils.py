import math

import pytest

from vocab_srs.fsrs.math_utils import clamp, lerp, retrievability


def test_clamp_keeps_values_inside_range():
    assert clamp(5.0, 1.0, 10.0) == 5.0
    assert clamp(-3.0, 1.0, 10.0) == 1.0
    assert clamp(42.0, 1.0, 10.0) == 10.0


def test_lerp_endpoints_and_midpoint():
    assert lerp(0.9, 1.0, 0.0) == 0.9
    assert lerp(0.9, 1.0, 1.0) == 1.0
    assert lerp(2.0, 4.0, 0.5) == 3.0


@pytest.mark.parametrize("stability", [0.5, 1.0, 37.0, 3650.0])
def test_retrievability_is_one_right_after_review(stability):
    assert retrievability(0.0, stability) == 1.0


@pytest.mark.parametrize("elapsed", [0.25, 1.0, 12.0, 400.0])
def test_retrievability_matches_interval_formula(elapsed):
    stability = elapsed / -math.log(0.9)
    assert retrievability(elapsed, stability) == pytest.approx(0.9)


def test_retrievability_non_positive_stability_is_zero():
    assert retrievability(1.0, 0.0) == 0.0
    assert retrievability(1.0, -2.0) == 0.0


def test_retrievability_negative_elapsed_counts_as_zero():
    assert retrievability(-5.0, 3.0) == 1.0


def test_retrievability_never_increases_with_time():
    values = [retrievability(days, 4.0) for days in (0, 0.1, 1, 2, 10, 100, 10000)]
    assert values == sorted(values, reverse=True)
    assert all(0.0 <= value <= 1.0 for value in values)
