"""
Irregular verb forms (cah "be located", yauh "go", huitz "come") that the
regular segmentation cannot produce.  Each surface form maps to one fixed
morpheme sequence plus a literal translation.

Data file layout (data/irregular.json):

    {"cah": [{"form": "nicah", "translation": "I am (located)",
              "analysis": [{"morpheme": "ni", "type": "prefix", ...}, ...]}]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from nahuatl_morph.lexicon import DATA_DIR, Morpheme, morpheme_from_raw


@dataclass(frozen=True, slots=True)
class IrregularForm:
    form: str
    verb: str  # the citation form it belongs to
    translation: str
    morphemes: tuple[Morpheme, ...]


class IrregularVerbs:
    def __init__(self):
        self.forms: dict[str, IrregularForm] = {}

    @classmethod
    def from_file(cls, path: str | Path) -> IrregularVerbs:
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: dict) -> IrregularVerbs:
        table = cls()
        for verb, entries in raw.items():
            for entry in entries:
                form = entry["form"]
                table.forms[form] = IrregularForm(
                    form=form,
                    verb=verb,
                    translation=entry.get("translation", ""),
                    morphemes=tuple(morpheme_from_raw(m) for m in entry.get("analysis", [])),
                )
        return table

    @classmethod
    def default(cls) -> IrregularVerbs:
        return cls.from_file(DATA_DIR / "irregular.json")

    def lookup(self, word: str) -> IrregularForm | None:
        return self.forms.get(word)

    def __contains__(self, word: str) -> bool:
        return word in self.forms

    def __len__(self) -> int:
        return len(self.forms)

    def summary(self) -> str:
        verbs = sorted({f.verb for f in self.forms.values()})
        return f"Irregular forms: {len(self.forms)} ({', '.join(verbs) or '-'})"
