from datetime import timedelta

import pytest

from vocab_srs.fsrs import InvalidRatingError, Phase, Rating, ReviewSimulator


@pytest.fixture
def simulator(now):
    return ReviewSimulator(start=now)


def test_review_jumps_to_due_time(simulator, now):
    first = simulator.review(Rating.GOOD)

    assert first.timestamp == now
    assert first.phase_before == Phase.NEW
    assert first.phase_after == Phase.TRANSITION
    assert first.retrievability == 1.0
    assert simulator.now() == now + timedelta(minutes=10)

    second = simulator.review(3)

    assert second.phase_after == Phase.REVIEW
    assert second.elapsed_days == pytest.approx(10 / 1440)
    assert second.stability_after == pytest.approx(1.0)
    assert simulator.now() == now + timedelta(minutes=10) + timedelta(days=1)
    assert len(simulator.history) == 2


def test_history_records_before_and_after(simulator):
    entry = simulator.review(Rating.EASY)

    assert entry.stability_before == 0.5
    assert entry.stability_after == pytest.approx(2.0)
    assert entry.difficulty_before == 5.0
    assert entry.difficulty_after == pytest.approx(4.5)
    assert entry.next_interval_days == pytest.approx(2.0)


def test_predictions_match_next_review(simulator):
    simulator.review(Rating.EASY)
    expected = simulator.predictions()[Rating.HARD].due
    simulator.review(Rating.HARD)

    assert simulator.now() == expected


def test_on_time_review_sits_at_target_retention(simulator):
    simulator.review(Rating.EASY)
    simulator.review(Rating.GOOD)

    assert simulator.retrievability() == pytest.approx(0.9)


def test_invalid_rating_changes_nothing(simulator, now):
    with pytest.raises(InvalidRatingError):
        simulator.review(0)

    assert simulator.history == []
    assert simulator.now() == now


def test_reset(simulator):
    simulator.review(Rating.GOOD)
    simulator.reset()

    assert simulator.history == []
    assert simulator.state.phase == Phase.NEW
    assert not simulator.clock.is_simulated
