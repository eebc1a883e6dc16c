"""
kotoba-core: text and scheduling engines for Japanese study tools.

Pure, synchronous building blocks behind a language-learning client:
streaming romaji-to-kana input, kanji suggestions from a small lexicon,
pronunciation/dictation scoring, and SM-2 review scheduling.

Basic Usage:
    import kotoba_core

    # Convert one edit of an input field (here the whole word at once;
    # typed key by key, "konnichiha" gives こんいちは as in an IME)
    state = kotoba_core.TransliterationState(kotoba_core.KanaMode.HIRAGANA)
    text, state = kotoba_core.transliterate(state, "", "konnichiha")

    # Suggest kanji for what was typed
    for entry in kotoba_core.suggest("がっこう"):
        print(f"{entry.surface} ({entry.reading}): {entry.gloss}")

    # Score an attempt
    result = kotoba_core.score("こんにちは", "こんにちわ")
    print(result.overall)

    # Schedule the next review
    item = kotoba_core.compute_next_review(4, 2.5, 6, 1)
"""

import time
from typing import Tuple

__version__ = "0.1.0"

from kotoba_core.characters import as_hiragana, as_katakana, is_kana
from kotoba_core.conversion import (
    ConversionTable, get_hiragana_table, get_katakana_table,
)
from kotoba_core.dictation import (
    DiffResult, calculate_score, compare_strings, is_similar,
    levenshtein_distance, normalize_japanese,
)
from kotoba_core.lexicon import (
    Lexicon, LexiconEntry, LexiconFormatError, load_lexicon, lookup,
)
from kotoba_core.scoring import (
    AlignmentUnit, FeedbackCategory, FeedbackItem, FeedbackType,
    PronunciationScore, UnitStatus, align, normalize_text, score,
)
from kotoba_core.srs import (
    ReviewItem, compute_next_review, interval_text, is_due,
    mastery_percentage, new_review_item, quality_from_action, review,
)
from kotoba_core.suggest import suggest
from kotoba_core.transliteration import (
    KanaMode, TransliterationState, convert_segment, cycle_mode,
    romaji_to_kana, set_mode, transliterate,
)


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-load the lexicon and conversion tables.

    Args:
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading kotoba-core tables...")

    t0 = time.perf_counter()
    get_hiragana_table()
    get_katakana_table()
    timings['conversion'] = (time.perf_counter() - t0) * 1000

    t0 = time.perf_counter()
    lexicon = load_lexicon()
    timings['lexicon'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Conversion:     {timings['conversion']:>7.1f}ms")
        print(f"  Lexicon:        {timings['lexicon']:>7.1f}ms ({len(lexicon):,} entries)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Transliteration
    "KanaMode",
    "TransliterationState",
    "transliterate",
    "cycle_mode",
    "set_mode",
    "convert_segment",
    "romaji_to_kana",
    "ConversionTable",
    "get_hiragana_table",
    "get_katakana_table",
    # Characters
    "as_hiragana",
    "as_katakana",
    "is_kana",
    # Lexicon
    "Lexicon",
    "LexiconEntry",
    "LexiconFormatError",
    "load_lexicon",
    "lookup",
    "suggest",
    # Scoring
    "AlignmentUnit",
    "FeedbackCategory",
    "FeedbackItem",
    "FeedbackType",
    "PronunciationScore",
    "UnitStatus",
    "align",
    "normalize_text",
    "score",
    # Dictation
    "DiffResult",
    "calculate_score",
    "compare_strings",
    "is_similar",
    "levenshtein_distance",
    "normalize_japanese",
    # Scheduling
    "ReviewItem",
    "compute_next_review",
    "review",
    "is_due",
    "new_review_item",
    "quality_from_action",
    "interval_text",
    "mastery_percentage",
    # Utilities
    "warm_up",
    "get_version",
    # Version
    "__version__",
]
