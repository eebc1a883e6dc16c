""" Unit tests for pronunciation scoring. """

import random

import pytest

from kotoba_core.scoring import (
    AlignmentUnit, FeedbackCategory, FeedbackType, UnitStatus,
    align, normalize_text, round_half_up, score,
)

C, I, M, E = UnitStatus.CORRECT, UnitStatus.INCORRECT, UnitStatus.MISSING, UnitStatus.EXTRA


def statuses(result):
    return [u.status for u in result.highlighted]


def kinds(result):
    return [(f.type, f.category) for f in result.feedback]


def test_normalize_text() -> None:
    assert normalize_text("  Hello, World! ") == "helloworld"
    assert normalize_text("こんにちは。 元気？") == "こんにちは元気"


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(66.666) == 67
    assert round_half_up(0.49) == 0


def test_substitution() -> None:
    result = score("abc", "abd", rhythm=80)
    assert (result.accuracy, result.duration, result.rhythm) == (67, 100, 80)
    assert result.fluency == 80
    assert result.overall == 79
    assert statuses(result) == [C, C, I]
    assert result.highlighted[2] == AlignmentUnit('d', I, expected='c')
    assert kinds(result) == [
        (FeedbackType.ERROR, FeedbackCategory.ACCURACY),
        (FeedbackType.SUCCESS, FeedbackCategory.FLUENCY),
    ]


def test_too_long() -> None:
    result = score("ab", "abcd", rhythm=80)
    assert statuses(result) == [C, C, E, E]
    assert result.accuracy == 50
    assert result.duration == 0
    duration = [f for f in result.feedback if f.category is FeedbackCategory.DURATION]
    assert len(duration) == 1
    assert duration[0].type is FeedbackType.WARNING
    assert "too long" in duration[0].message


def test_too_short() -> None:
    result = score("abcd", "ab", rhythm=80)
    assert statuses(result) == [C, C, M, M]
    assert [u.unit for u in result.highlighted] == ['a', 'b', 'c', 'd']
    assert result.duration == 50
    assert any("too short" in f.message for f in result.feedback)


def test_perfect() -> None:
    result = score("今日は、いい天気です。", "今日はいい天気です", rhythm=90)
    assert (result.accuracy, result.duration, result.fluency) == (100, 100, 100)
    assert result.overall == 98
    assert len(result.highlighted) == len(normalize_text("今日は、いい天気です。"))
    assert all(u.status is C for u in result.highlighted)
    assert kinds(result) == [
        (FeedbackType.SUCCESS, FeedbackCategory.ACCURACY),
        (FeedbackType.SUCCESS, FeedbackCategory.FLUENCY),
    ]


def test_mostly_right() -> None:
    result = score("abcdefghij", "abcdefghxx", rhythm=80)
    assert result.accuracy == 80
    assert result.fluency == 88
    assert kinds(result) == [
        (FeedbackType.WARNING, FeedbackCategory.ACCURACY),
        (FeedbackType.SUCCESS, FeedbackCategory.FLUENCY),
    ]
    assert result.feedback[0].suggestion


def test_all_wrong() -> None:
    result = score("abc", "xyz", rhythm=80)
    assert result.accuracy == 0
    assert kinds(result) == [(FeedbackType.ERROR, FeedbackCategory.ACCURACY)]


@pytest.mark.parametrize("target, transcript", [
    ("", "abc"),
    ("abc", ""),
    ("。", "abc"),
    ("", ""),
])
def test_empty_side(target, transcript) -> None:
    result = score(target, transcript, rhythm=80)
    assert result.accuracy == 0
    assert result.highlighted == []
    assert 1 <= len(result.feedback) <= 3


def test_rhythm_is_reproducible() -> None:
    first = score("abc", "abc", rng=random.Random(7))
    second = score("abc", "abc", rng=random.Random(7))
    assert first.rhythm == second.rhythm
    assert first.overall == second.overall


def test_rhythm_range() -> None:
    rng = random.Random(0)
    for _ in range(50):
        result = score("abc", "abd", rng=rng)
        assert 70 <= result.rhythm <= 100
        assert 0 <= result.overall <= 100


def test_fixed_rhythm_wins_over_rng() -> None:
    assert score("abc", "abc", rng=random.Random(1), rhythm=75).rhythm == 75


def test_align_shifts_after_insertion() -> None:
    # Positional walk: one inserted character misaligns the rest
    units = align("abc", "xabc")
    assert [u.status for u in units] == [I, I, I, E]


@pytest.mark.parametrize("target, transcript", [
    ("abc", "abc"),
    ("abcdefghij", "abcdefghxx"),
    ("abc", "xyz"),
    ("", ""),
])
def test_accuracy_feedback_always_present(target, transcript) -> None:
    result = score(target, transcript, rhythm=80)
    assert result.feedback[0].category is FeedbackCategory.ACCURACY
    assert 1 <= len(result.feedback) <= 3
