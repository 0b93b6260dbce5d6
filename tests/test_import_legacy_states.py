from datetime import datetime, timezone

import pytest

from scripts.import_legacy_states import convert_record
from vocab_srs.fsrs import InvalidStateError, Phase


def legacy_record(last_review_time, **overrides):
    record = {
        "user_id": 7,
        "vocab_id": 1234,
        "stability": 3.5,
        "difficulty": 4.2,
        "last_review_time": last_review_time,
        "lapse_count": 1,
        "consecutive_fails": 0,
        "phase": "review",
    }
    record.update(overrides)
    return record


def test_seconds_and_milliseconds_give_the_same_instant():
    expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    from_seconds = convert_record(legacy_record(1700000000), "s")
    from_millis = convert_record(legacy_record(1700000000000), "ms")

    assert from_seconds.last_review_time == expected
    assert from_millis.last_review_time == expected
    assert from_seconds == from_millis


def test_unit_is_never_guessed():
    # Milliseconds read as seconds are out of range, not reinterpreted
    with pytest.raises(InvalidStateError):
        convert_record(legacy_record(1700000000000), "s")


def test_zero_means_never_reviewed():
    card = convert_record(legacy_record(0, phase=None), "ms")

    assert card.last_review_time is None
    assert card.phase == Phase.NEW


def test_garbage_timestamp_is_rejected():
    with pytest.raises(InvalidStateError):
        convert_record(legacy_record("last tuesday"), "s")


def test_legacy_values_are_clamped():
    card = convert_record(legacy_record(1700000000, stability=0, difficulty=11), "s")

    assert card.stability == 0.5
    assert card.difficulty == 10.0
