"""
Kana character helpers for kotoba-core.

Hiragana and katakana share one syllable inventory laid out at a fixed
code point distance, so conversion between the two is a plain shift.
"""

from kotoba_core.constants import HIRAGANA_START, HIRAGANA_END, KATAKANA_OFFSET

KATAKANA_START = HIRAGANA_START + KATAKANA_OFFSET
KATAKANA_END = HIRAGANA_END + KATAKANA_OFFSET


def is_hiragana_char(char: str) -> bool:
    """Check if a single character is in the shiftable hiragana block."""
    return HIRAGANA_START <= ord(char) <= HIRAGANA_END


def is_katakana_char(char: str) -> bool:
    """Check if a single character is in the shiftable katakana block."""
    return KATAKANA_START <= ord(char) <= KATAKANA_END


def is_kana_char(char: str) -> bool:
    """Check if a single character is kana (either block, marks included)."""
    code = ord(char)
    return 0x3040 <= code <= 0x309F or 0x30A0 <= code <= 0x30FF


def is_hiragana(text: str) -> bool:
    return bool(text) and all(is_hiragana_char(c) for c in text)


def is_katakana(text: str) -> bool:
    return bool(text) and all(is_katakana_char(c) for c in text)


def is_kana(text: str) -> bool:
    """Check if text is entirely kana."""
    return bool(text) and all(is_kana_char(c) for c in text)


def as_katakana(text: str) -> str:
    """
    Shift every hiragana character in text onto its katakana counterpart.

    Characters outside the hiragana block (including the long vowel
    mark ー) are copied unchanged.

    Example:
        >>> as_katakana("こーひー")
        'コーヒー'
    """
    return ''.join(
        chr(ord(c) + KATAKANA_OFFSET) if is_hiragana_char(c) else c
        for c in text
    )


def as_hiragana(text: str) -> str:
    """Inverse of as_katakana."""
    return ''.join(
        chr(ord(c) - KATAKANA_OFFSET) if is_katakana_char(c) else c
        for c in text
    )
