"""
Hand-authored analyses for words whose segmentation the search cannot
disambiguate (e.g. "imeuh" = i-me-uh "his maguey" or im-e-uh "their bean").

Entries name lexicon records by surface form, type and any distinguishing
attribute; they are resolved against the lexicon at load time.
"""

from __future__ import annotations

import json
from pathlib import Path

from nahuatl_morph.lexicon import DATA_DIR, Lexicon, Morpheme


class AmbiguousWords:
    def __init__(self):
        self.words: dict[str, list[tuple[Morpheme, ...]]] = {}

    @classmethod
    def from_file(cls, path: str | Path, lexicon: Lexicon) -> AmbiguousWords:
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return cls.from_dict(raw, lexicon)

    @classmethod
    def from_dict(cls, raw: dict, lexicon: Lexicon) -> AmbiguousWords:
        """Resolve every reference; ValueError if one names no lexicon record."""
        table = cls()
        for word, alternatives in raw.items():
            table.words[word] = [
                tuple(_resolve(ref, lexicon, word) for ref in sequence)
                for sequence in alternatives
            ]
        return table

    @classmethod
    def default(cls, lexicon: Lexicon) -> AmbiguousWords:
        return cls.from_file(DATA_DIR / "ambiguous.json", lexicon)

    def lookup(self, word: str) -> list[tuple[Morpheme, ...]]:
        return self.words.get(word, [])

    def __contains__(self, word: str) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)

    def summary(self) -> str:
        return f"Ambiguous words: {len(self.words)}"


def _resolve(ref: dict, lexicon: Lexicon, word: str) -> Morpheme:
    attrs = {k: v for k, v in ref.items() if k not in ("morpheme", "type")}
    record = lexicon.find(ref.get("morpheme", ""), ref.get("type", ""), **attrs)
    if record is None:
        raise ValueError(f"Ambiguous word {word!r}: no lexicon record matches {ref!r}")
    return record
