from datetime import timedelta

import pytest

from vocab_srs.fsrs import Phase, Rating, format_interval, quick_review_intervals
from vocab_srs.fsrs.memory_state import initialize_new_card
from vocab_srs.fsrs.predictor import predict_all


def test_predict_all_for_new_card(now):
    predictions = predict_all(initialize_new_card(), now)

    assert list(predictions) == [Rating.AGAIN, Rating.HARD, Rating.GOOD, Rating.EASY]
    assert predictions[Rating.AGAIN].due == now + timedelta(minutes=1)
    assert predictions[Rating.EASY].due == now + timedelta(days=2)
    assert predictions[Rating.GOOD].label == "10 mins"
    assert predictions[Rating.EASY].label == "2 days"


def test_review_predictions_grow_with_rating(review_card_state, now):
    predictions = predict_all(review_card_state, now)
    days = [predictions[rating].days for rating in Rating]

    assert days == sorted(days)


def test_quick_intervals_derive_from_good(review_card_state, now):
    quick = quick_review_intervals(review_card_state, now)
    good = predict_all(review_card_state, now)[Rating.GOOD].days

    assert quick[Rating.GOOD] == pytest.approx(max(1.0, good))
    assert quick[Rating.HARD] == pytest.approx(max(1.0, good * 0.5))
    assert quick[Rating.EASY] == pytest.approx(max(1.0, good * 2.0))
    assert Rating.AGAIN not in quick


def test_quick_intervals_are_floored_at_one_day(review_card_state, now):
    quick = quick_review_intervals(review_card_state.evolve(stability=1.0), now)
    assert quick[Rating.HARD] == 1.0


def test_quick_intervals_only_in_review(now):
    assert quick_review_intervals(initialize_new_card(), now) == {}
    assert initialize_new_card().phase == Phase.NEW


@pytest.mark.parametrize("interval, label", [
    (timedelta(seconds=20), "< 1 min"),
    (timedelta(minutes=1), "1 min"),
    (timedelta(minutes=10), "10 mins"),
    (timedelta(hours=1), "1 hour"),
    (timedelta(hours=3), "3 hours"),
    (timedelta(days=1), "1 day"),
    (timedelta(days=2.5), "2.5 days"),
    (timedelta(days=75), "2.5 months"),
    (timedelta(days=365), "1 year"),
    (timedelta(days=3650), "10 years"),
])
def test_format_interval(interval, label):
    assert format_interval(interval) == label
