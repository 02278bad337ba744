"""
Orthography conversion between modern and classical Nahuatl spelling.

Rules are ordered substring rewrites read from two map files, one
"source:target" pair per line:

    data/modern_to_classical.map    (kw → cu, k → c/qu, w → hu ...)
    data/classical_to_modern.map    (qu → k, hu → w, z → s ...)

Both directions lower-case the input and strip combining diacritics
before any rule applies.

Usage:
    from nahuatl_morph.orthography import OrthographyConverter

    conv = OrthographyConverter()               # packaged rules
    conv.to_classical("nikochi")                # 'nicochi'
    conv.to_modern("nicochi")                   # 'nikochi'
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from pathlib import Path

from nahuatl_morph.lexicon import DATA_DIR

CLASSICAL = "classical"
MODERN = "modern"
ORTHOGRAPHIES = (CLASSICAL, MODERN)

_MODERN_TO_CLASSICAL_FILE = "modern_to_classical.map"
_CLASSICAL_TO_MODERN_FILE = "classical_to_modern.map"

_COMBINING_RE = re.compile("[\u0300-\u036f]")


# ── Rule file parsing ──────────────────────────────────────────────────────

def _parse_rules(lines: list[str]) -> list[tuple[str, str]]:
    """Parse "source:target" lines, skipping blanks and # comments."""
    rules = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        source, target = line.split(":", 1)
        source, target = source.strip(), target.strip()
        if not source:
            continue
        rules.append((source, target))
    return rules


def _read_rules(path: Path) -> list[tuple[str, str]]:
    with path.open(encoding="utf-8") as f:
        return _parse_rules(f.readlines())


def normalize(word: str) -> str:
    """Lower-case and drop combining diacritics (á → a, ā → a)."""
    decomposed = unicodedata.normalize("NFD", word.lower())
    return _COMBINING_RE.sub("", decomposed)


def _rewrite(word: str, rules: list[tuple[str, str]]) -> str:
    result = normalize(word)
    for source, target in rules:
        result = result.replace(source, target)
    return result


# ── Main converter class ───────────────────────────────────────────────────

class OrthographyConverter:
    """
    Converts single words or running text between the two spellings.

    Either point it at a directory holding the two .map files, or pass
    the rule lists directly (tests do this).
    """

    def __init__(
        self,
        rules_dir: str | Path | None = None,
        *,
        to_classical_rules: list[tuple[str, str]] | None = None,
        to_modern_rules: list[tuple[str, str]] | None = None,
    ):
        self.rules_dir = Path(rules_dir) if rules_dir is not None else DATA_DIR

        if to_classical_rules is None:
            to_classical_rules = _read_rules(self.rules_dir / _MODERN_TO_CLASSICAL_FILE)
        if to_modern_rules is None:
            to_modern_rules = _read_rules(self.rules_dir / _CLASSICAL_TO_MODERN_FILE)

        self.to_classical_rules: list[tuple[str, str]] = list(to_classical_rules)
        self.to_modern_rules: list[tuple[str, str]] = list(to_modern_rules)

    def to_classical(self, word: str) -> str:
        return _rewrite(word, self.to_classical_rules)

    def to_modern(self, word: str) -> str:
        return _rewrite(word, self.to_modern_rules)

    def convert_word(self, word: str, target: str) -> str:
        """Convert one word into the `target` orthography."""
        if target == CLASSICAL:
            return self.to_classical(word)
        if target == MODERN:
            return self.to_modern(word)
        raise ValueError(f"Unknown orthography {target!r} (expected one of {ORTHOGRAPHIES})")

    def convert_text(self, text: str, target: str) -> str:
        """Convert running text, preserving whitespace and punctuation."""
        if not text:
            return text

        tokens = re.findall(r"[\w]+|[^\w]+", text, re.UNICODE)
        return "".join(
            self.convert_word(tok, target) if tok[0].isalpha() else tok
            for tok in tokens
        )

    def summary(self) -> str:
        lines = ["Orthography Converter (modern <-> classical)"]
        lines.append(f"  Rules dir:          {self.rules_dir}")
        lines.append(f"  Modern→classical:   {len(self.to_classical_rules)} rules")
        lines.append(f"  Classical→modern:   {len(self.to_modern_rules)} rules")
        return "\n".join(lines)


@lru_cache(maxsize=None)
def default_converter() -> OrthographyConverter:
    return OrthographyConverter()


def modern_to_classical(word: str) -> str:
    return default_converter().to_classical(word)


def classical_to_modern(word: str) -> str:
    return default_converter().to_modern(word)
