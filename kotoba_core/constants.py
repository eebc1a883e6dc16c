"""
Shared constants for kotoba-core.

Tuning values for the transliteration, suggestion, scoring and
scheduling engines. Everything here is read-only.
"""

from typing import FrozenSet, Tuple


# ============================================================================
# Transliteration
# ============================================================================

# Longest romaji key in the conversion tables
MAX_ROMAJI_LENGTH = 4

# Consonants whose doubling produces a small tsu (sokuon)
SOKUON_CONSONANTS: FrozenSet[str] = frozenset('kstfhcgzjdbp')

# Letters that can follow n to form an n-row syllable
N_FOLLOWERS: FrozenSet[str] = frozenset('aiueoy')

# Hiragana block shifted onto katakana by adding KATAKANA_OFFSET
HIRAGANA_START = 0x3041
HIRAGANA_END = 0x3096
KATAKANA_OFFSET = 0x60

SMALL_TSU = 'っ'
SYLLABIC_N = 'ん'
LONG_VOWEL_MARK = 'ー'


# ============================================================================
# Lexicon Suggestions
# ============================================================================

MAX_SUGGESTIONS = 5
MIN_FRAGMENT_LENGTH = 2


# ============================================================================
# Pronunciation Scoring
# ============================================================================

# Sentence punctuation removed before comparison (full-width and ASCII)
STRIPPED_PUNCTUATION = '。、！？.,!?'

RHYTHM_MIN = 70
RHYTHM_SPAN = 30

FLUENCY_WEIGHTS: Tuple[float, float] = (0.6, 0.4)  # accuracy, duration

# accuracy, duration, rhythm, fluency
OVERALL_WEIGHTS: Tuple[float, float, float, float] = (0.4, 0.2, 0.2, 0.2)

ACCURACY_SUCCESS_THRESHOLD = 90
ACCURACY_WARNING_THRESHOLD = 70
DURATION_WARNING_THRESHOLD = 70
FLUENCY_SUCCESS_THRESHOLD = 80


# ============================================================================
# Spaced Repetition (SM-2)
# ============================================================================

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
EASE_PRECISION = 4  # decimal places kept on the ease factor
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

FIRST_INTERVAL = 1
SECOND_INTERVAL = 6

# Successful repetitions after which an item counts as mastered
MASTERY_REPETITIONS = 10

ACTION_QUALITIES = {
    'again': 0,
    'hard': 3,
    'good': 4,
    'easy': 5,
}
