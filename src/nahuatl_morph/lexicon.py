"""
Load the Nahuatl morpheme lexicon and build lookup tables for the parser.

The lexicon is a JSON object of named sections (particles, prefixes,
verbStems, nounStems, suffixes, ...), each a list of records with a
surface form under "morpheme" and a "type" tag.  Records are mapped onto
one frozen dataclass per morpheme type.

Usage:
    from nahuatl_morph.lexicon import Lexicon, default_lexicon

    lex = default_lexicon()                 # packaged data, built once
    lex = Lexicon.from_file("my_lexicon.json")

    for m in lex.lookup("mo"):
        print(m.kind, m.role, m.person, m.number)
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Iterator

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

INVARIABLE_KINDS = (
    "particle", "interrogative", "adverb", "adjective", "interjection", "numeral",
)
STEM_KINDS = ("verb_stem", "noun_stem")
PLURAL_CATEGORIES = ("plural", "plural_marker")

# dataclass field name → JSON key, where they differ
_JSON_KEYS = {
    "form": "morpheme",
    "used_with": "usedWith",
    "absolutive_suffix": "absolutiveSuffix",
    "english_plural": "englishPlural",
    "english_suffix": "englishSuffix",
    "past_participle": "pp",
}
_FIELD_NAMES = {v: k for k, v in _JSON_KEYS.items()}


# ── Morpheme records ─────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class Morpheme:
    """Fields shared by every lexicon record."""

    form: str
    english: str = ""
    category: str | None = None  # plural, absolutive, imperative, locative ...

    KIND: ClassVar[str] = "morpheme"

    @property
    def kind(self) -> str:
        return self.KIND

    def to_dict(self) -> dict:
        """The record as the JSON "details" payload (camelCase keys)."""
        out: dict = {"morpheme": self.form, "type": self.kind}
        for f in fields(self):
            if f.name in ("form", "word_class"):
                continue
            value = getattr(self, f.name)
            if value is None or value == "":
                continue
            out[_JSON_KEYS.get(f.name, f.name)] = value
        return out


@dataclass(frozen=True, slots=True)
class Prefix(Morpheme):
    role: str | None = None  # subject, object, possessive, reflexive, negation
    person: str | None = None  # first, second, third
    number: str | None = None  # singular, plural
    used_with: str | None = None  # noun, verb

    KIND: ClassVar[str] = "prefix"

    @property
    def reading(self) -> tuple[str | None, str | None, str | None]:
        return (self.role, self.person, self.number)


@dataclass(frozen=True, slots=True)
class Suffix(Morpheme):
    nominalizing: bool = False
    countable: bool | None = None
    number: str | None = None
    english_suffix: str | None = None

    KIND: ClassVar[str] = "suffix"

    @property
    def is_plural(self) -> bool:
        return self.category in PLURAL_CATEGORIES


@dataclass(frozen=True, slots=True)
class NounStem(Morpheme):
    animate: bool = False
    countable: bool = False
    absolutive_suffix: bool = True  # False: citation form takes no -tl/-li
    english_plural: str | None = None

    KIND: ClassVar[str] = "noun_stem"


@dataclass(frozen=True, slots=True)
class VerbStem(Morpheme):
    past_participle: str | None = None
    progressive: str | None = None
    agent: str | None = None

    KIND: ClassVar[str] = "verb_stem"


@dataclass(frozen=True, slots=True)
class Invariable(Morpheme):
    """A word that never inflects: particle, adverb, numeral, etc."""

    word_class: str = "particle"

    @property
    def kind(self) -> str:
        return self.word_class


@dataclass(frozen=True, slots=True)
class IrregularVerb(Morpheme):
    KIND: ClassVar[str] = "irregular_verb"


_TYPES: dict[str, type[Morpheme]] = {
    "prefix": Prefix,
    "suffix": Suffix,
    "noun_stem": NounStem,
    "verb_stem": VerbStem,
    "irregular_verb": IrregularVerb,
}


def attr_name(json_key: str) -> str:
    """Map a camelCase data-file key to the dataclass attribute name."""
    return _FIELD_NAMES.get(json_key, json_key)


def morpheme_from_raw(raw: dict) -> Morpheme:
    """Build the typed record for one raw JSON entry.

    Raises ValueError for a record without a surface form or with an
    unknown type.
    """
    form = raw.get("morpheme", "")
    kind = raw.get("type")
    if not form:
        raise ValueError(f"Lexicon record without a surface form: {raw!r}")

    if kind in INVARIABLE_KINDS:
        return Invariable(
            form=form,
            english=raw.get("english", ""),
            category=raw.get("category"),
            word_class=kind,
        )

    cls = _TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown morpheme type {kind!r} for '{form}'")

    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in raw.items():
        if key == "type":
            continue
        name = attr_name(key)
        if name in known:
            kwargs[name] = value
    return cls(**kwargs)


# ── Lexicon ──────────────────────────────────────────────────────────────────

class Lexicon:
    """
    All morpheme records, kept longest-surface-form first.

    Two indexes:
    - form_index: surface form → list[Morpheme]
    - kind_index: type tag    → list[Morpheme]   (same length ordering)

    Built once, never mutated afterwards; safe to share between threads.
    """

    def __init__(self):
        self.records: list[Morpheme] = []

        # Lookup indexes (built by _build_indexes)
        self.form_index: dict[str, list[Morpheme]] = {}
        self.kind_index: dict[str, list[Morpheme]] = {}

        self.prefix_candidates: list[Morpheme] = []
        self.stems: list[Morpheme] = []
        self.nominalizing_suffix_forms: frozenset[str] = frozenset()
        self.plural_suffix_forms: frozenset[str] = frozenset()
        self.ambiguous_prefix_forms: frozenset[str] = frozenset()

    @classmethod
    def from_file(cls, path: str | Path) -> Lexicon:
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return cls._from_raw(raw)

    @classmethod
    def from_dict(cls, raw: dict) -> Lexicon:
        """Load from an already-parsed JSON dict."""
        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict) -> Lexicon:
        lex = cls()
        for section, entries in raw.items():
            for entry in entries:
                lex.records.append(morpheme_from_raw(entry))
            logger.debug("Loaded %d records from section %r", len(entries), section)
        lex._build_indexes()
        return lex

    def _build_indexes(self) -> None:
        # Stable: records of equal length keep their file order
        self.records.sort(key=lambda m: len(m.form), reverse=True)
        self.form_index.clear()
        self.kind_index.clear()

        for rec in self.records:
            self.form_index.setdefault(rec.form, []).append(rec)
            self.kind_index.setdefault(rec.kind, []).append(rec)

        self.stems = [r for r in self.records if r.kind in STEM_KINDS]
        self.prefix_candidates = [
            r for r in self.records
            if r.kind == "prefix" or r.category == "imperative"
        ]

        suffixes = self.of_kind("suffix")
        self.nominalizing_suffix_forms = frozenset(
            s.form for s in suffixes if s.nominalizing
        )
        self.plural_suffix_forms = frozenset(
            s.form for s in suffixes if s.is_plural
        )

        readings: dict[str, set] = {}
        for p in self.of_kind("prefix"):
            readings.setdefault(p.form, set()).add(p.reading)
        self.ambiguous_prefix_forms = frozenset(
            form for form, seen in readings.items() if len(seen) > 1
        )

    # ── Queries ──────────────────────────────────────────────────────────

    def of_kind(self, *kinds: str) -> list[Morpheme]:
        """Records of the given type tags, longest surface form first."""
        if len(kinds) == 1:
            return self.kind_index.get(kinds[0], [])
        return [r for r in self.records if r.kind in kinds]

    def lookup(self, form: str) -> list[Morpheme]:
        return self.form_index.get(form, [])

    def find(self, form: str, kind: str, **attrs) -> Morpheme | None:
        """First record with this surface form and type whose attributes match."""
        for rec in self.form_index.get(form, []):
            if rec.kind != kind:
                continue
            if all(getattr(rec, attr_name(k), None) == v for k, v in attrs.items()):
                return rec
        return None

    def invariable(self, word: str) -> Morpheme | None:
        for rec in self.form_index.get(word, []):
            if rec.kind in INVARIABLE_KINDS:
                return rec
        return None

    @property
    def imperative_prefixes(self) -> list[Morpheme]:
        return [r for r in self.prefix_candidates if r.category == "imperative"]

    def prefix_readings(self, form: str) -> list[Prefix]:
        return [r for r in self.form_index.get(form, []) if r.kind == "prefix"]

    def is_ambiguous_prefix(self, form: str) -> bool:
        return form in self.ambiguous_prefix_forms

    def contextual_suffix(self, suffix: Suffix, imperative: bool) -> Suffix:
        """Resolve a surface suffix that is both a plural and a locative.

        Imperative context selects the plural reading, anything else the
        locative one.  Suffixes without such a pair are returned as is.
        """
        variants = [
            s for s in self.form_index.get(suffix.form, [])
            if s.kind == "suffix" and s.category in ("plural", "locative")
        ]
        if len(variants) < 2:
            return suffix
        wanted = "plural" if imperative else "locative"
        for s in variants:
            if s.category == wanted:
                return s
        return suffix

    # ── Iteration / stats ────────────────────────────────────────────────

    def __iter__(self) -> Iterator[Morpheme]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def summary(self) -> str:
        lines = [
            f"Records:        {len(self.records)}",
            f"Unique forms:   {len(self.form_index)}",
            f"Ambiguous prefixes: {', '.join(sorted(self.ambiguous_prefix_forms)) or '-'}",
            "",
            "Type breakdown:",
        ]
        kind_counts = Counter(r.kind for r in self.records)
        for kind, count in kind_counts.most_common():
            lines.append(f"  {kind:15s} {count:5d}")
        return "\n".join(lines)


@lru_cache(maxsize=None)
def default_lexicon() -> Lexicon:
    """The packaged lexicon, loaded once per process."""
    return Lexicon.from_file(DATA_DIR / "lexicon.json")
