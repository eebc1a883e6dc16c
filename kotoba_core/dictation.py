"""
Dictation answer checking for kotoba-core.

Index-by-index comparison of a typed answer with the expected sentence,
a percentage score with a length penalty, and an edit-distance based
"close enough" check for partial credit.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

# Full-width ASCII block (！ .. ～) sits at a fixed distance from ASCII
FULLWIDTH_START = 0xFF01
FULLWIDTH_END = 0xFF5E
FULLWIDTH_OFFSET = 0xFEE0

DEFAULT_SIMILARITY_THRESHOLD = 0.8
LENGTH_PENALTY = 0.5


@dataclass(frozen=True, slots=True)
class DiffResult:
    """
    One compared position.

    Attributes:
        char: Character typed, or the expected one if nothing was typed
        correct: True if the typed character matches
        expected: Expected character for incorrect positions
    """
    char: str
    correct: bool
    expected: Optional[str] = None


def _to_halfwidth(char: str) -> str:
    code = ord(char)
    if FULLWIDTH_START <= code <= FULLWIDTH_END:
        return chr(code - FULLWIDTH_OFFSET)
    return char


def normalize_japanese(text: str) -> str:
    """
    Normalize text for dictation comparison.

    Trims, removes all whitespace, folds full-width ASCII to half-width
    and lowercases.

    Example:
        >>> normalize_japanese(" ＡＢＣ です ")
        'abcです'
    """
    text = ''.join(text.strip().split())
    return ''.join(_to_halfwidth(c) for c in text).lower()


def compare_strings(user_input: str, correct_answer: str) -> List[DiffResult]:
    """Compare two answers position by position over the longer length."""
    user = normalize_japanese(user_input)
    correct = normalize_japanese(correct_answer)

    results = []
    for i in range(max(len(user), len(correct))):
        user_char = user[i] if i < len(user) else ''
        correct_char = correct[i] if i < len(correct) else ''

        if user_char == correct_char:
            results.append(DiffResult(user_char, True))
        elif user_char:
            results.append(DiffResult(user_char, False, expected=correct_char))
        else:
            results.append(DiffResult(correct_char, False, expected=correct_char))

    return results


def calculate_score(user_input: str, correct_answer: str) -> int:
    """
    Percentage of correct characters, minus half a point per character of
    length difference. Never negative; 0 for an empty answer key.
    """
    user = normalize_japanese(user_input)
    correct = normalize_japanese(correct_answer)

    if not correct:
        return 0

    correct_count = sum(1 for a, b in zip(user, correct) if a == b)
    adjusted = correct_count - abs(len(user) - len(correct)) * LENGTH_PENALTY

    return max(0, math.floor(adjusted / len(correct) * 100 + 0.5))


def levenshtein_distance(a: str, b: str) -> int:
    """Simple Levenshtein distance."""
    if len(a) < len(b):
        return levenshtein_distance(b, a)
    if len(b) == 0:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        curr = [i + 1]
        for j, cb in enumerate(b):
            cost = 0 if ca == cb else 1
            curr.append(min(curr[j] + 1, prev[j + 1] + 1, prev[j] + cost))
        prev = curr

    return prev[len(b)]


def is_similar(user_input: str, correct_answer: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """Check if an answer is close enough to the expected one for partial credit."""
    user = normalize_japanese(user_input)
    correct = normalize_japanese(correct_answer)

    max_len = max(len(user), len(correct))
    if max_len == 0:
        return True

    similarity = 1 - levenshtein_distance(user, correct) / max_len
    return similarity >= threshold
