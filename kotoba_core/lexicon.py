"""
Lexicon table for kotoba-core.

A read-only mapping from a kana reading to the dictionary entries written
with it. The table ships as a JSON file (data/lexicon.json) that maps each
reading to its list of {surface, gloss} entries; homophones share a key.

On load the entries are flattened into one tuple, in file order, and the
readings are indexed by a marisa_trie.RecordTrie whose records are
positions in that tuple. Sorting hits by position gives back the table
order no matter how the trie orders its keys.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

import marisa_trie

logger = logging.getLogger(__name__)

# ============================================================================
# Record Schema
# ============================================================================
# Each trie record holds a single uint32: the entry's position in the
# flattened entry tuple.

RECORD_FORMAT = "<I"


@dataclass(frozen=True, slots=True)
class LexiconEntry:
    """
    A dictionary entry.

    Attributes:
        surface: Written form, usually with kanji (e.g. "学校")
        reading: Hiragana reading (e.g. "がっこう")
        gloss: Short meaning
    """
    surface: str
    reading: str
    gloss: str


class LexiconFormatError(ValueError):
    """Raised when lexicon data does not have the expected shape."""
    pass


# ============================================================================
# Lexicon
# ============================================================================

class Lexicon:
    """Immutable reading-indexed entry table."""

    __slots__ = ('_entries', '_trie')

    def __init__(self, entries: Iterable[LexiconEntry]):
        self._entries: Tuple[LexiconEntry, ...] = tuple(entries)
        self._trie = marisa_trie.RecordTrie(
            RECORD_FORMAT,
            ((entry.reading, (index,)) for index, entry in enumerate(self._entries)),
        )

    def _resolve(self, records) -> List[LexiconEntry]:
        return [self._entries[index] for index in sorted(r[0] for r in records)]

    def lookup(self, reading: str) -> List[LexiconEntry]:
        """Get all entries whose reading equals reading, in table order."""
        return self._resolve(self._trie.get(reading, []))

    def lookup_prefix(self, prefix: str) -> List[LexiconEntry]:
        """Get all entries whose reading starts with prefix, in table order."""
        return self._resolve(record for _, record in self._trie.items(prefix))

    def iter_containing(self, fragment: str) -> Iterator[LexiconEntry]:
        """Yield entries whose reading contains fragment, in table order."""
        for entry in self._entries:
            if fragment in entry.reading:
                yield entry

    def contains(self, reading: str) -> bool:
        return reading in self._trie

    def has_prefix(self, prefix: str) -> bool:
        """Check if any reading starts with the given prefix."""
        try:
            next(iter(self._trie.iterkeys(prefix)))
            return True
        except StopIteration:
            return False

    def readings(self) -> List[str]:
        """Distinct readings in table order."""
        return list(dict.fromkeys(entry.reading for entry in self._entries))

    def __iter__(self) -> Iterator[LexiconEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Lexicon({len(self)} entries)"


# ============================================================================
# File Format
# ============================================================================

def parse_lexicon_data(data) -> List[LexiconEntry]:
    """
    Turn decoded lexicon JSON into entries.

    Args:
        data: Mapping of reading -> list of {"surface", "gloss"} objects

    Returns:
        Entries in file order

    Raises:
        LexiconFormatError: If data does not have that shape
    """
    if not isinstance(data, dict):
        raise LexiconFormatError("lexicon root must be an object keyed by reading")

    entries = []
    for reading, items in data.items():
        if not reading or not isinstance(items, list):
            raise LexiconFormatError(f"entries for reading {reading!r} must be a non-empty key and a list")
        for item in items:
            if not isinstance(item, dict):
                raise LexiconFormatError(f"entry under {reading!r} must be an object")
            surface = item.get('surface')
            gloss = item.get('gloss', '')
            if not isinstance(surface, str) or not surface or not isinstance(gloss, str):
                raise LexiconFormatError(f"entry under {reading!r} needs a string surface and gloss")
            entries.append(LexiconEntry(surface=surface, reading=reading, gloss=gloss))

    return entries


def read_lexicon_file(path: Path) -> List[LexiconEntry]:
    """
    Read and parse a lexicon JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        LexiconFormatError: If the file is not valid lexicon JSON
    """
    if not path.exists():
        raise FileNotFoundError(
            f"Lexicon not found at {path}. "
            "Run 'python scripts/build_lexicon.py' to build it."
        )

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise LexiconFormatError(f"{path}: {e}") from e

    return parse_lexicon_data(data)


# ============================================================================
# Lexicon Loading
# ============================================================================

# Module-level singleton
_LEXICON: Optional[Lexicon] = None


def get_lexicon_path() -> Path:
    """Get the default lexicon path."""
    return Path(__file__).parent / "data" / "lexicon.json"


def is_lexicon_loaded() -> bool:
    """Check if lexicon is loaded."""
    return _LEXICON is not None


def load_lexicon(path: Optional[Path] = None) -> Lexicon:
    """
    Load the lexicon table.

    The table is loaded once and shared; later calls return the same
    object, whatever path they pass, until unload_lexicon() is called.

    Args:
        path: Path to a lexicon JSON file. Uses default if not specified.

    Returns:
        The loaded Lexicon
    """
    global _LEXICON

    if _LEXICON is not None:
        return _LEXICON

    if path is None:
        path = get_lexicon_path()

    _LEXICON = Lexicon(read_lexicon_file(path))
    logger.debug("Loaded %d lexicon entries from %s", len(_LEXICON), path)

    return _LEXICON


def lookup(reading: str) -> List[LexiconEntry]:
    """Look up a reading in the shared lexicon."""
    return load_lexicon().lookup(reading)


def lookup_prefix(prefix: str) -> List[LexiconEntry]:
    """Look up all entries whose reading starts with prefix."""
    return load_lexicon().lookup_prefix(prefix)


def contains(reading: str) -> bool:
    """Check if a reading exists in the shared lexicon."""
    return load_lexicon().contains(reading)


def has_prefix(prefix: str) -> bool:
    """Check if any reading starts with the given prefix."""
    return load_lexicon().has_prefix(prefix)


def get_lexicon_size() -> int:
    """Get the number of entries in the lexicon (0 if not loaded)."""
    if _LEXICON is None:
        return 0

    return len(_LEXICON)


def unload_lexicon():
    """Drop the shared lexicon so the next access reloads it."""
    global _LEXICON
    _LEXICON = None
