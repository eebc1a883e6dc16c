""" Shared fixtures for kotoba-core tests. """

from datetime import datetime, timezone

import pytest

from kotoba_core.lexicon import Lexicon, LexiconEntry, unload_lexicon
from kotoba_core.transliteration import KanaMode, TransliterationState


@pytest.fixture
def hiragana() -> TransliterationState:
    return TransliterationState(KanaMode.HIRAGANA)


@pytest.fixture
def katakana() -> TransliterationState:
    return TransliterationState(KanaMode.KATAKANA)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def fresh_lexicon():
    """ Make sure the shared lexicon is reloaded around the test. """
    unload_lexicon()
    yield
    unload_lexicon()


@pytest.fixture
def make_lexicon():
    """ Build a small lexicon from (surface, reading) pairs. """
    def _make(*pairs) -> Lexicon:
        return Lexicon(LexiconEntry(surface, reading, f"gloss of {surface}") for surface, reading in pairs)
    return _make
