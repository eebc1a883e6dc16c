""" Unit tests for SM-2 scheduling. """

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from kotoba_core.srs import (
    ReviewItem, clamp_quality, compute_next_review, interval_text, is_due,
    mastery_percentage, new_review_item, quality_from_action, review,
)


def test_second_success(now) -> None:
    item = compute_next_review(4, 2.5, 6, 1, now)
    assert item == ReviewItem(2.5, 15, 2, now + timedelta(days=15))


def test_first_success(now) -> None:
    item = compute_next_review(4, 2.5, 0, 0, now)
    assert (item.interval_days, item.repetitions) == (1, 1)
    assert item.next_review_date == now + timedelta(days=1)


def test_second_step_is_at_least_six_days(now) -> None:
    item = compute_next_review(4, 2.5, 1, 1, now)
    assert item.interval_days == 6


def test_failure_resets(now) -> None:
    item = compute_next_review(0, 2.5, 15, 3, now)
    assert item == ReviewItem(2.5, 1, 0, now + timedelta(days=1))


def test_failure_keeps_ease(now) -> None:
    assert compute_next_review(2, 1.7, 40, 5, now).ease_factor == 1.7


@pytest.mark.parametrize("quality, ease", [
    (5, 2.6),
    (4, 2.5),
    (3, 2.36),
])
def test_ease_update(now, quality, ease) -> None:
    assert compute_next_review(quality, 2.5, 0, 0, now).ease_factor == ease


def test_ease_floor(now) -> None:
    assert compute_next_review(3, 1.3, 10, 4, now).ease_factor == 1.3
    assert compute_next_review(3, 1.4, 10, 4, now).ease_factor == 1.3


def test_interval_rounds_half_up(now) -> None:
    # 5 * 2.5 == 12.5
    assert compute_next_review(4, 2.5, 5, 2, now).interval_days == 13


def test_quality_is_clamped(now) -> None:
    assert clamp_quality(7) == 5
    assert clamp_quality(-1) == 0
    assert clamp_quality(3) == 3
    assert compute_next_review(7, 2.5, 0, 0, now) == compute_next_review(5, 2.5, 0, 0, now)
    assert compute_next_review(-1, 2.5, 6, 2, now).repetitions == 0


def test_review_chain(now) -> None:
    item = new_review_item(now)
    assert item == ReviewItem(2.5, 0, 0, now)
    assert is_due(item.next_review_date, now)

    intervals = []
    for _ in range(3):
        item = review(item, 4, now)
        intervals.append(item.interval_days)
    assert intervals == [1, 6, 15]
    assert item.repetitions == 3


def test_items_are_immutable(now) -> None:
    item = new_review_item(now)
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.repetitions = 3
    review(item, 5, now)
    assert item.repetitions == 0


def test_dates_are_timezone_aware() -> None:
    assert compute_next_review(4).next_review_date.tzinfo is not None
    assert ReviewItem().next_review_date.tzinfo is not None


def test_is_due(now) -> None:
    assert is_due(now, now)
    assert is_due(now - timedelta(seconds=1), now)
    assert not is_due(now + timedelta(seconds=1), now)


def test_quality_from_action() -> None:
    assert [quality_from_action(a) for a in ('again', 'hard', 'good', 'easy')] == [0, 3, 4, 5]
    with pytest.raises(ValueError):
        quality_from_action('meh')


@pytest.mark.parametrize("days, text", [
    (0, 'New'),
    (1, '1 day'),
    (15, '15 days'),
    (60, '2 months'),
    (730, '2 years'),
])
def test_interval_text(days, text) -> None:
    assert interval_text(days) == text


def test_mastery_percentage() -> None:
    assert mastery_percentage(0) == 0
    assert mastery_percentage(5) == 50
    assert mastery_percentage(25) == 100


def test_naive_dates_are_read_as_utc() -> None:
    naive = datetime(2024, 1, 1)
    item = compute_next_review(4, 2.5, 6, 1, now=naive)
    assert item.next_review_date == datetime(2024, 1, 16, tzinfo=timezone.utc)
    assert is_due(item.next_review_date)
    assert is_due(item.next_review_date, datetime(2024, 1, 16))
    assert not is_due(item.next_review_date, datetime(2024, 1, 15))


def test_naive_now_against_aware_item() -> None:
    item = new_review_item()
    assert is_due(item.next_review_date, datetime(2030, 1, 1))
    assert not is_due(item.next_review_date, datetime(2000, 1, 1))
    assert new_review_item(datetime(2024, 1, 1)).next_review_date.tzinfo is not None
