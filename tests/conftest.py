"""Shared test fixtures."""

from pathlib import Path

import pytest

from nahuatl_morph.engine import Analyzer
from nahuatl_morph.lexicon import Lexicon, default_lexicon


def _find_config() -> Path | None:
    """Find nahuatl_morph.toml from the project root."""
    for base in [Path("."), Path("..")]:
        p = base / "nahuatl_morph.toml"
        if p.exists():
            return p.resolve()
    return None


# Minimal lexicon for unit tests: one verb, one animate and one inanimate
# noun, a handful of prefixes and suffixes.
SMALL_LEXICON = {
    "adverbs": [
        {"morpheme": "nican", "type": "adverb", "english": "here"},
    ],
    "prefixes": [
        {"morpheme": "ni", "type": "prefix", "role": "subject", "person": "first", "number": "singular", "english": "I"},
        {"morpheme": "ti", "type": "prefix", "role": "subject", "person": "second", "number": "singular", "english": "you (sg)"},
        {"morpheme": "ti", "type": "prefix", "role": "subject", "person": "first", "number": "plural", "english": "we"},
        {"morpheme": "qui", "type": "prefix", "role": "object", "person": "third", "number": "singular", "english": "him/her/it"},
        {"morpheme": "no", "type": "prefix", "role": "possessive", "person": "first", "number": "singular", "usedWith": "noun", "english": "my"},
        {"morpheme": "no", "type": "prefix", "role": "reflexive", "person": "first", "number": "singular", "usedWith": "verb", "english": "myself"},
        {"morpheme": "xi", "type": "prefix", "category": "imperative", "english": "(you)"},
    ],
    "verbStems": [
        {"morpheme": "cochi", "type": "verb_stem", "english": "sleep", "pp": "slept", "agent": "sleeper"},
        {"morpheme": "itta", "type": "verb_stem", "english": "see", "pp": "seen"},
    ],
    "nounStems": [
        {"morpheme": "cal", "type": "noun_stem", "english": "house", "animate": False, "countable": True},
        {"morpheme": "coyo", "type": "noun_stem", "english": "coyote", "animate": True, "countable": True},
    ],
    "suffixes": [
        {"morpheme": "tl", "type": "suffix", "category": "absolutive", "nominalizing": True},
        {"morpheme": "li", "type": "suffix", "category": "absolutive", "nominalizing": True},
        {"morpheme": "meh", "type": "suffix", "category": "plural", "number": "plural"},
        {"morpheme": "h", "type": "suffix", "category": "plural", "number": "plural"},
        {"morpheme": "can", "type": "suffix", "category": "plural", "number": "plural"},
        {"morpheme": "can", "type": "suffix", "category": "locative", "english": "place"},
        {"morpheme": "ni", "type": "suffix", "category": "agentive", "nominalizing": True, "countable": True, "englishSuffix": "er"},
    ],
}


@pytest.fixture
def small_lexicon() -> Lexicon:
    return Lexicon.from_dict(SMALL_LEXICON)


@pytest.fixture
def lexicon() -> Lexicon:
    """The packaged lexicon."""
    return default_lexicon()


@pytest.fixture
def analyzer() -> Analyzer:
    """Analyzer over the packaged data files."""
    return Analyzer()


@pytest.fixture
def config_path() -> Path:
    """The project's nahuatl_morph.toml; skips if it is not reachable."""
    p = _find_config()
    if p is None:
        pytest.skip("nahuatl_morph.toml not found")
    return p
