"""
Romaji to kana conversion tables for kotoba-core.

The hiragana table is the primary data. The katakana table is derived
from it by shifting the hiragana block, so the two can never drift apart.

Each table keeps its keys in a marisa_trie.Trie so the tokenizer can ask
whether any key starts with the text still waiting in its buffer.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

import marisa_trie

from kotoba_core.characters import as_katakana
from kotoba_core.constants import LONG_VOWEL_MARK


# ============================================================================
# Primary Table (romaji -> hiragana)
# ============================================================================

ROMAJI_TO_HIRAGANA: Mapping[str, str] = MappingProxyType({
    # Vowels
    'a': 'あ', 'i': 'い', 'u': 'う', 'e': 'え', 'o': 'お',
    'yi': 'い', 'wu': 'う', 'whu': 'う',
    # K-row
    'ka': 'か', 'ki': 'き', 'ku': 'く', 'ke': 'け', 'ko': 'こ',
    'kya': 'きゃ', 'kyi': 'きぃ', 'kyu': 'きゅ', 'kye': 'きぇ', 'kyo': 'きょ',
    # S-row
    'sa': 'さ', 'si': 'し', 'shi': 'し', 'su': 'す', 'se': 'せ', 'so': 'そ',
    'sha': 'しゃ', 'shu': 'しゅ', 'she': 'しぇ', 'sho': 'しょ',
    'sya': 'しゃ', 'syi': 'しぃ', 'syu': 'しゅ', 'sye': 'しぇ', 'syo': 'しょ',
    # T-row
    'ta': 'た', 'ti': 'ち', 'chi': 'ち', 'tu': 'つ', 'tsu': 'つ', 'te': 'て', 'to': 'と',
    'cha': 'ちゃ', 'chu': 'ちゅ', 'che': 'ちぇ', 'cho': 'ちょ',
    'tya': 'ちゃ', 'tyi': 'ちぃ', 'tyu': 'ちゅ', 'tye': 'ちぇ', 'tyo': 'ちょ',
    # N-row
    'na': 'な', 'ni': 'に', 'nu': 'ぬ', 'ne': 'ね', 'no': 'の',
    'nya': 'にゃ', 'nyi': 'にぃ', 'nyu': 'にゅ', 'nye': 'にぇ', 'nyo': 'にょ',
    # H-row
    'ha': 'は', 'hi': 'ひ', 'hu': 'ふ', 'fu': 'ふ', 'he': 'へ', 'ho': 'ほ',
    'hya': 'ひゃ', 'hyi': 'ひぃ', 'hyu': 'ひゅ', 'hye': 'ひぇ', 'hyo': 'ひょ',
    'fa': 'ふぁ', 'fi': 'ふぃ', 'fe': 'ふぇ', 'fo': 'ふぉ',
    'fya': 'ふゃ', 'fyi': 'ふぃ', 'fyu': 'ふゅ', 'fye': 'ふぇ', 'fyo': 'ふょ',
    # M-row
    'ma': 'ま', 'mi': 'み', 'mu': 'む', 'me': 'め', 'mo': 'も',
    'mya': 'みゃ', 'myi': 'みぃ', 'myu': 'みゅ', 'mye': 'みぇ', 'myo': 'みょ',
    # Y-row
    'ya': 'や', 'yu': 'ゆ', 'yo': 'よ',
    # R-row
    'ra': 'ら', 'ri': 'り', 'ru': 'る', 're': 'れ', 'ro': 'ろ',
    'rya': 'りゃ', 'ryi': 'りぃ', 'ryu': 'りゅ', 'rye': 'りぇ', 'ryo': 'りょ',
    # W-row
    'wa': 'わ', 'wo': 'を', 'wi': 'うぃ', 'we': 'うぇ',
    # N
    'nn': 'ん',
    "n'": 'ん',
    # G-row
    'ga': 'が', 'gi': 'ぎ', 'gu': 'ぐ', 'ge': 'げ', 'go': 'ご',
    'gya': 'ぎゃ', 'gyi': 'ぎぃ', 'gyu': 'ぎゅ', 'gye': 'ぎぇ', 'gyo': 'ぎょ',
    # Z-row
    'za': 'ざ', 'zi': 'じ', 'ji': 'じ', 'zu': 'ず', 'ze': 'ぜ', 'zo': 'ぞ',
    'ja': 'じゃ', 'ju': 'じゅ', 'je': 'じぇ', 'jo': 'じょ',
    'zya': 'じゃ', 'zyi': 'じぃ', 'zyu': 'じゅ', 'zye': 'じぇ', 'zyo': 'じょ',
    # D-row
    'da': 'だ', 'di': 'ぢ', 'du': 'づ', 'de': 'で', 'do': 'ど',
    'dya': 'ぢゃ', 'dyi': 'ぢぃ', 'dyu': 'ぢゅ', 'dye': 'ぢぇ', 'dyo': 'ぢょ',
    # B-row
    'ba': 'ば', 'bi': 'び', 'bu': 'ぶ', 'be': 'べ', 'bo': 'ぼ',
    'bya': 'びゃ', 'byi': 'びぃ', 'byu': 'びゅ', 'bye': 'びぇ', 'byo': 'びょ',
    # P-row
    'pa': 'ぱ', 'pi': 'ぴ', 'pu': 'ぷ', 'pe': 'ぺ', 'po': 'ぽ',
    'pya': 'ぴゃ', 'pyi': 'ぴぃ', 'pyu': 'ぴゅ', 'pye': 'ぴぇ', 'pyo': 'ぴょ',
    # Small vowels
    'xa': 'ぁ', 'xi': 'ぃ', 'xu': 'ぅ', 'xe': 'ぇ', 'xo': 'ぉ',
    'la': 'ぁ', 'li': 'ぃ', 'lu': 'ぅ', 'le': 'ぇ', 'lo': 'ぉ',
    'xya': 'ゃ', 'xyu': 'ゅ', 'xyo': 'ょ',
    'lya': 'ゃ', 'lyu': 'ゅ', 'lyo': 'ょ',
    # Small tsu
    'xtu': 'っ', 'xtsu': 'っ', 'ltu': 'っ', 'ltsu': 'っ',
    # Punctuation
    '-': LONG_VOWEL_MARK,
    '.': '。',
    ',': '、',
    '?': '？',
    '!': '！',
})


# ============================================================================
# Conversion Table
# ============================================================================

class ConversionTable:
    """
    Immutable romaji -> kana mapping with prefix queries.

    Attributes:
        name: Script name ("hiragana" or "katakana")
    """

    __slots__ = ('name', '_mapping', '_keys')

    def __init__(self, name: str, mapping: Mapping[str, str]):
        self.name = name
        self._mapping: Mapping[str, str] = MappingProxyType(dict(mapping))
        self._keys = marisa_trie.Trie(self._mapping.keys())

    def get(self, romaji: str) -> Optional[str]:
        """Get the kana for an exact romaji key, or None."""
        return self._mapping.get(romaji)

    def has_prefix(self, prefix: str) -> bool:
        """Check if any romaji key starts with prefix (or equals it)."""
        try:
            next(iter(self._keys.iterkeys(prefix)))
            return True
        except StopIteration:
            return False

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._mapping.items())

    def __contains__(self, romaji: object) -> bool:
        return romaji in self._mapping

    def __getitem__(self, romaji: str) -> str:
        return self._mapping[romaji]

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"ConversionTable({self.name!r}, {len(self)} keys)"


def derive_katakana(mapping: Mapping[str, str]) -> Dict[str, str]:
    """
    Derive the katakana mapping from a hiragana mapping.

    Every value is shifted by the hiragana/katakana code point offset.
    The long vowel mark is copied literally.
    """
    derived = {romaji: as_katakana(kana) for romaji, kana in mapping.items()}
    derived['-'] = LONG_VOWEL_MARK
    return derived


# ============================================================================
# Table Loading
# ============================================================================

# Module-level singletons
_HIRAGANA_TABLE: Optional[ConversionTable] = None
_KATAKANA_TABLE: Optional[ConversionTable] = None


def get_hiragana_table() -> ConversionTable:
    """Get the romaji -> hiragana table. Builds it on first use."""
    global _HIRAGANA_TABLE

    if _HIRAGANA_TABLE is None:
        _HIRAGANA_TABLE = ConversionTable('hiragana', ROMAJI_TO_HIRAGANA)

    return _HIRAGANA_TABLE


def get_katakana_table() -> ConversionTable:
    """Get the romaji -> katakana table. Builds it on first use."""
    global _KATAKANA_TABLE

    if _KATAKANA_TABLE is None:
        _KATAKANA_TABLE = ConversionTable('katakana', derive_katakana(ROMAJI_TO_HIRAGANA))

    return _KATAKANA_TABLE
