"""
Properties of the public scheduling API.
"""

import math
import random
from datetime import timedelta

import pytest

from vocab_srs import fsrs
from vocab_srs.fsrs import CardState, Phase, Rating


def random_walk(now, steps=40, seed=7):
    """Yield (state, now) pairs along a random rating sequence."""
    rng = random.Random(seed)
    state = fsrs.init_card()
    for _ in range(steps):
        yield state, now
        rating = rng.choice(list(Rating))
        state, due, _ = fsrs.apply(state, rating, now)
        now = due + timedelta(hours=rng.randint(0, 48))
    yield state, now


def test_easy_on_new_card_graduates(now):
    state, due, _ = fsrs.apply(fsrs.init_card(), Rating.EASY, now)

    assert state.phase == Phase.REVIEW
    assert state.stability == pytest.approx(2.0)
    assert state.difficulty == pytest.approx(4.5)
    assert due == now + timedelta(days=2)


def test_again_in_review_is_a_lapse(now):
    card = CardState(stability=1.0, difficulty=5.0, phase=Phase.REVIEW,
                     last_review_time=now - timedelta(days=1))
    state, due, _ = fsrs.apply(card, Rating.AGAIN, now)

    assert state.stability == pytest.approx(0.5)
    assert timedelta(0) < due - now <= timedelta(minutes=30)
    assert state.lapse_count == card.lapse_count + 1


def test_apply_accepts_none_for_new_card(now):
    state, due, _ = fsrs.apply(None, 3, now)
    assert state.phase == Phase.TRANSITION
    assert due == now + timedelta(minutes=10)


def test_apply_does_not_touch_input(review_card_state, now):
    snapshot = review_card_state.to_record()
    fsrs.apply(review_card_state, Rating.EASY, now)
    assert review_card_state.to_record() == snapshot


def test_retrievability_is_monotonic(review_card_state, now):
    times = [now + timedelta(hours=h) for h in (0, 1, 12, 48, 24 * 30, 24 * 365)]
    values = [fsrs.retrievability(review_card_state, t) for t in times]

    assert values == sorted(values, reverse=True)
    assert all(0.0 <= value <= 1.0 for value in values)


def test_retrievability_of_new_card(now):
    assert fsrs.retrievability(fsrs.init_card(), now) == 1.0


def test_bounds_hold_along_random_reviews(now):
    for state, at in random_walk(now, steps=80, seed=3):
        assert 1.0 <= state.difficulty <= 10.0
        assert state.stability > 0
        assert 0.0 <= fsrs.retrievability(state, at) <= 1.0


def test_prediction_is_idempotent(review_card_state, now):
    assert fsrs.predict(review_card_state, now) == fsrs.predict(review_card_state, now)


def test_prediction_matches_apply_for_every_reachable_state(now):
    for state, at in random_walk(now):
        predicted = fsrs.predict(state, at)
        assert set(predicted) == {1, 2, 3, 4}
        for rating in Rating:
            assert predicted[rating].due == fsrs.apply(state, rating, at).due


def test_always_easy_graduates_in_one_step(now):
    state = fsrs.apply(fsrs.init_card(), Rating.EASY, now).state
    assert state.phase == Phase.REVIEW


def test_always_again_never_leaves_learning(now):
    state = fsrs.init_card()
    for minute in range(20):
        state = fsrs.apply(state, Rating.AGAIN, now + timedelta(minutes=minute)).state
        assert state.phase == Phase.LEARNING


def test_lapse_accounting(now):
    rng = random.Random(11)
    state = fsrs.init_card()
    for _ in range(100):
        rating = rng.choice(list(Rating))
        new_state = fsrs.apply(state, rating, now).state
        assert new_state.lapse_count >= state.lapse_count
        if rating != Rating.AGAIN:
            assert new_state.consecutive_fails == 0
        state = new_state
        now += timedelta(days=1)


def test_is_due(review_card_state, now):
    assert fsrs.is_due(fsrs.init_card(), now)
    assert not fsrs.is_due(review_card_state, review_card_state.last_review_time)

    due = fsrs.next_due(review_card_state)
    assert not fsrs.is_due(review_card_state, due - timedelta(minutes=1))
    assert fsrs.is_due(review_card_state, due + timedelta(seconds=1))


def test_next_due(review_card_state):
    expected = review_card_state.last_review_time + timedelta(days=-10.0 * math.log(0.9))

    assert fsrs.next_due(fsrs.init_card()) is None
    assert fsrs.next_due(review_card_state) == expected
    assert fsrs.retrievability(review_card_state, expected) == pytest.approx(0.9)


def test_graduated_card_is_due_at_its_stored_due_time(now):
    state, due, _ = fsrs.apply(fsrs.init_card(), Rating.EASY, now)

    assert not fsrs.is_due(state, now + timedelta(hours=6), due=due)
    assert not fsrs.is_due(state, due - timedelta(seconds=1), due=due)
    assert fsrs.is_due(state, due, due=due)


def test_next_due_follows_the_memory_model_only(now):
    graduated, due, _ = fsrs.apply(fsrs.init_card(), Rating.EASY, now)
    assert fsrs.next_due(graduated) < due

    reviewed, due, _ = fsrs.apply(graduated, Rating.GOOD, due)
    assert fsrs.next_due(reviewed) == due


def test_prediction_with_signals_matches_apply(review_card_state, now):
    config = fsrs.SchedulerConfig(behavior_modifiers=("response_time", "skip"))
    signals = fsrs.ReviewSignals(latency_ms=1500, skipped=True)

    predicted = fsrs.predict(review_card_state, now, config, signals)
    for rating in Rating:
        outcome = fsrs.apply(review_card_state, rating, now, config, signals)
        assert predicted[rating].due == outcome.due

    plain = fsrs.predict(review_card_state, now, config)
    assert plain[Rating.GOOD].due != predicted[Rating.GOOD].due
