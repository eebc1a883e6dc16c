""" Unit tests for dictation answer checking. """

from kotoba_core.dictation import (
    DiffResult, calculate_score, compare_strings, is_similar,
    levenshtein_distance, normalize_japanese,
)


def test_normalize_japanese() -> None:
    assert normalize_japanese(" ＡＢＣ です ") == "abcです"
    assert normalize_japanese("わたし　は") == "わたしは"
    assert normalize_japanese("１２３！") == "123!"


def test_compare_strings() -> None:
    assert compare_strings("axc", "abc") == [
        DiffResult('a', True),
        DiffResult('x', False, expected='b'),
        DiffResult('c', True),
    ]


def test_compare_strings_uneven() -> None:
    assert compare_strings("ab", "abc")[2] == DiffResult('c', False, expected='c')
    assert compare_strings("abcd", "abc")[3] == DiffResult('d', False, expected='')
    assert compare_strings("", "") == []


def test_calculate_score() -> None:
    assert calculate_score("わたしは", "わたしは") == 100
    assert calculate_score("わたし", "わたしは") == 63
    assert calculate_score("ＷＡＴＡＳＨＩ", "watashi") == 100
    assert calculate_score("xyz", "a") == 0
    assert calculate_score("abc", "") == 0


def test_levenshtein_distance() -> None:
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("がっこう", "がっこう") == 0


def test_is_similar() -> None:
    assert is_similar("こんにちわ", "こんにちは")
    assert not is_similar("わたしわ", "わたしは")
    assert is_similar("わたしわ", "わたしは", threshold=0.75)
    assert is_similar("", "")
