"""
Streaming romaji to kana transliteration for kotoba-core.

The engine is fed the contents of a text field before and after every
edit. Newly typed latin letters are appended to a small lookahead buffer
and converted as soon as they unambiguously spell a kana; anything that
might still grow into a longer match stays in the buffer and is shown
raw until the next keystroke decides it.

State is an explicit immutable value. Callers keep one
TransliterationState per input field and pass it back on every call:

    >>> state = TransliterationState(KanaMode.HIRAGANA)
    >>> text, state = transliterate(state, "", "ka")
    >>> text
    'か'
"""

import string
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from kotoba_core.constants import (
    MAX_ROMAJI_LENGTH, N_FOLLOWERS, SOKUON_CONSONANTS,
)
from kotoba_core.conversion import (
    ConversionTable, get_hiragana_table, get_katakana_table,
)


# ============================================================================
# State
# ============================================================================

class KanaMode(Enum):
    """Target script of the input field."""
    OFF = 'off'
    HIRAGANA = 'hiragana'
    KATAKANA = 'katakana'


_NEXT_MODE = {
    KanaMode.OFF: KanaMode.HIRAGANA,
    KanaMode.HIRAGANA: KanaMode.KATAKANA,
    KanaMode.KATAKANA: KanaMode.OFF,
}


@dataclass(frozen=True, slots=True)
class TransliterationState:
    """
    Per-field conversion state.

    Attributes:
        mode: Active target script
        pending_buffer: Raw romaji typed but not yet converted. It is also
            the tail of the text last returned to the caller.
    """
    mode: KanaMode = KanaMode.OFF
    pending_buffer: str = ''


def cycle_mode(state: TransliterationState) -> TransliterationState:
    """Advance OFF -> HIRAGANA -> KATAKANA -> OFF, dropping the buffer."""
    return TransliterationState(_NEXT_MODE[state.mode])


def set_mode(state: TransliterationState, mode: KanaMode) -> TransliterationState:
    """Switch directly to mode, dropping the buffer."""
    return TransliterationState(mode)


def get_table(mode: KanaMode) -> Optional[ConversionTable]:
    """Get the conversion table for mode, or None when conversion is off."""
    if mode is KanaMode.HIRAGANA:
        return get_hiragana_table()
    if mode is KanaMode.KATAKANA:
        return get_katakana_table()
    return None


# ============================================================================
# Tokenizer
# ============================================================================

# Length-preserving, unlike str.lower() on arbitrary unicode
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _longest_match(text: str, pos: int, table: ConversionTable) -> Tuple[Optional[str], int]:
    for length in range(MAX_ROMAJI_LENGTH, 0, -1):
        if pos + length > len(text):
            continue
        kana = table.get(text[pos:pos + length])
        if kana is not None:
            return kana, length
    return None, 0


def convert_segment(romaji: str, table: ConversionTable) -> Tuple[str, str]:
    """
    Convert as much of romaji as can be decided now.

    Args:
        romaji: Raw latin input (any case)
        table: Target conversion table

    Returns:
        Tuple of (converted text, pending remainder). The remainder is the
        unconverted tail that could still become kana once more input
        arrives; it keeps the case it was typed in.

    Example:
        >>> convert_segment("kon", get_hiragana_table())
        ('こ', 'n')
    """
    folded = romaji.translate(_ASCII_LOWER)
    end = len(folded)
    out: List[str] = []
    pos = 0

    while pos < end:
        first = folded[pos]
        rest = end - pos

        # nn: one ん; keep the second n when it can start the next syllable
        if first == 'n' and rest >= 2 and folded[pos + 1] == 'n':
            out.append(table['nn'])
            if rest >= 3 and folded[pos + 2] in N_FOLLOWERS:
                pos += 1
            else:
                pos += 2
            continue

        kana, length = _longest_match(folded, pos, table)
        if kana is not None:
            out.append(kana)
            pos += length
            continue

        # Doubled consonant -> small tsu, second consonant stays
        if rest >= 2 and folded[pos + 1] == first and first in SOKUON_CONSONANTS:
            out.append(table['xtu'])
            pos += 1
            continue

        if first == 'n':
            if rest == 1:
                break
            if folded[pos + 1] not in N_FOLLOWERS:
                out.append(table['nn'])
                pos += 1
                continue

        # Incomplete but still valid: wait for more input
        if table.has_prefix(folded[pos:]):
            break

        out.append(romaji[pos])
        pos += 1

    return ''.join(out), romaji[pos:]


# ============================================================================
# Streaming API
# ============================================================================

def transliterate(
    state: TransliterationState,
    previous_value: str,
    new_value: str,
) -> Tuple[str, TransliterationState]:
    """
    Convert one edit of a text field.

    Args:
        state: State returned by the previous call for this field
        previous_value: Field contents before the edit
        new_value: Field contents after the edit

    Returns:
        Tuple of (text to show in the field, new state)

    Deletions and other non-append edits are returned unchanged and drop
    the buffer; kana already emitted is never turned back into romaji.
    """
    table = get_table(state.mode)
    if table is None:
        return new_value, replace(state, pending_buffer='')

    if len(new_value) < len(previous_value) or not new_value.startswith(previous_value):
        return new_value, replace(state, pending_buffer='')

    buffer = state.pending_buffer
    if buffer and previous_value.endswith(buffer):
        settled = previous_value[:len(previous_value) - len(buffer)]
    else:
        # Field was changed behind our back; start over from here
        settled, buffer = previous_value, ''

    emitted, pending = convert_segment(buffer + new_value[len(previous_value):], table)
    return settled + emitted + pending, replace(state, pending_buffer=pending)


def romaji_to_kana(text: str, mode: KanaMode = KanaMode.HIRAGANA) -> str:
    """
    Convert a complete romaji string in one go.

    Unlike the streaming API there is no more input to wait for, so a
    trailing lone n becomes ん. Other incomplete tails are left as typed.

    Example:
        >>> romaji_to_kana("hon")
        'ほん'
        >>> romaji_to_kana("ko-hi-", KanaMode.KATAKANA)
        'コーヒー'
    """
    table = get_table(mode)
    if table is None:
        return text

    kana, pending = convert_segment(text, table)
    if pending.translate(_ASCII_LOWER) == 'n':
        return kana + table['nn']
    return kana + pending
