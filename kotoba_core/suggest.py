"""
Kanji suggestions for buffered kana input.

Ranks lexicon entries against a kana fragment: exact readings first, then
readings that start with the fragment, then readings that merely contain
it. Each surface form is suggested at most once.
"""

from itertools import chain
from typing import List, Optional

from kotoba_core.characters import as_hiragana
from kotoba_core.constants import MAX_SUGGESTIONS, MIN_FRAGMENT_LENGTH
from kotoba_core.lexicon import Lexicon, LexiconEntry, load_lexicon


def suggest(fragment: str, lexicon: Optional[Lexicon] = None) -> List[LexiconEntry]:
    """
    Suggest up to five entries for a kana fragment.

    Args:
        fragment: Kana typed so far. Katakana is matched as hiragana.
        lexicon: Table to search. Uses the shared lexicon if not specified.

    Returns:
        Ranked entries; empty for fragments shorter than two characters

    Example:
        >>> [e.surface for e in suggest("がっ")]
        ['学校']
    """
    if len(fragment) < MIN_FRAGMENT_LENGTH:
        return []

    if lexicon is None:
        lexicon = load_lexicon()

    key = as_hiragana(fragment)

    exact = lexicon.lookup(key)
    starts = (e for e in lexicon.lookup_prefix(key) if e.reading != key)
    inside = (e for e in lexicon.iter_containing(key) if not e.reading.startswith(key))

    seen = set()
    results = []
    for entry in chain(exact, starts, inside):
        if entry.surface in seen:
            continue
        seen.add(entry.surface)
        results.append(entry)
        if len(results) >= MAX_SUGGESTIONS:
            break

    return results
