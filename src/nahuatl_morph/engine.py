"""
Word analysis: fast-path tables, backtracking search with retries, and
grammar filtering behind a single analyze() call.

Usage:
    from nahuatl_morph.engine import Analyzer

    analyzer = Analyzer()                               # packaged data
    result = analyzer.analyze("nicochi")
    result.success, result.parsings[0].english_translation   # True, 'I sleep'

    analyzer.analyze("nikochi", orthography="modern")
    analyzer = Analyzer.from_config("nahuatl_morph.toml")
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from nahuatl_morph.ambiguous import AmbiguousWords
from nahuatl_morph.constraints import ConstraintValidator
from nahuatl_morph.irregular import IrregularVerbs
from nahuatl_morph.lexicon import Lexicon, Morpheme, default_lexicon
from nahuatl_morph.orthography import (
    CLASSICAL, MODERN, ORTHOGRAPHIES, OrthographyConverter, default_converter,
    normalize,
)
from nahuatl_morph.search import (
    BacktrackingSearch, Candidate, MorphemeInstance, SearchContext, SearchLimits,
    next_exclusion,
)
from nahuatl_morph.translator import Translator

logger = logging.getLogger(__name__)


# ── Results ──────────────────────────────────────────────────────────────────

@dataclass(slots=True)
class ParsedMorpheme:
    morpheme: str  # surface form in the requested orthography
    record: Morpheme

    @property
    def details(self) -> dict:
        return self.record.to_dict()

    def to_dict(self) -> dict:
        return {"morpheme": self.morpheme, "details": self.details}


@dataclass(slots=True)
class Parsing:
    morphemes: list[ParsedMorpheme]
    english_translation: str

    @property
    def records(self) -> tuple[Morpheme, ...]:
        return tuple(m.record for m in self.morphemes)

    def signature(self) -> tuple:
        return tuple(
            (m.morpheme, m.record.kind, m.record.category,
             getattr(m.record, "role", None),
             getattr(m.record, "person", None),
             getattr(m.record, "number", None))
            for m in self.morphemes
        )

    def to_dict(self) -> dict:
        return {
            "morphemes": [m.to_dict() for m in self.morphemes],
            "englishTranslation": self.english_translation,
        }

    def __repr__(self) -> str:
        forms = "-".join(m.morpheme for m in self.morphemes)
        return f"Parsing({forms} = {self.english_translation!r})"


@dataclass(slots=True)
class AnalysisResult:
    """Outcome of one analyze() call.

    `source` tells which stage answered ("ambiguous", "invariable",
    "irregular" or "search"); `attempts` and `excluded` describe the
    retry loop and are empty for fast-path hits.
    """

    success: bool
    parsings: list[Parsing] = field(default_factory=list)
    error: str | None = None
    source: str | None = None
    attempts: int = 0
    excluded: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        out: dict = {
            "success": self.success,
            "parsings": [p.to_dict() for p in self.parsings],
        }
        if self.error:
            out["error"] = self.error
        return out

    def __repr__(self) -> str:
        if not self.success:
            return f"AnalysisResult(failed: {self.error})"
        return f"AnalysisResult({self.source}: {self.parsings!r})"


# ── Analyzer ─────────────────────────────────────────────────────────────────

class Analyzer:
    """Analyzes single words against one lexicon.

    Holds only read-only tables; every analyze() call keeps its states
    and exclusion set to itself, so one instance can serve many threads.
    """

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        *,
        irregular: IrregularVerbs | None = None,
        ambiguous: AmbiguousWords | None = None,
        converter: OrthographyConverter | None = None,
        limits: SearchLimits | None = None,
        translator: Translator | None = None,
    ):
        packaged = lexicon is None
        self.lexicon = lexicon if lexicon is not None else default_lexicon()

        if irregular is None:
            irregular = IrregularVerbs.default() if packaged else IrregularVerbs()
        if ambiguous is None:
            ambiguous = AmbiguousWords.default(self.lexicon) if packaged else AmbiguousWords()

        self.irregular = irregular
        self.ambiguous = ambiguous
        self.converter = converter or default_converter()
        self.limits = limits or SearchLimits()
        self.translator = translator or Translator()
        self.search = BacktrackingSearch(self.lexicon, self.limits)
        self.constraints = ConstraintValidator(self.lexicon)

    @classmethod
    def from_config(cls, config_path: str | Path = "nahuatl_morph.toml") -> Analyzer:
        """Build an Analyzer from a TOML config file.

        Paths in the config are resolved relative to the config file's
        directory.  Tables that are not configured use the packaged data.
        """
        config_path = Path(config_path)
        cfg = load_config(config_path)
        base_dir = config_path.parent

        lexicon = None
        lex_path = cfg.get("lexicon", {}).get("path")
        if lex_path:
            lexicon = Lexicon.from_file(_resolve(lex_path, base_dir))
        lexicon_in_use = lexicon if lexicon is not None else default_lexicon()

        irregular = None
        irr_path = cfg.get("irregular", {}).get("path")
        if irr_path:
            irregular = IrregularVerbs.from_file(_resolve(irr_path, base_dir))
        elif lexicon is not None:
            irregular = IrregularVerbs.default()

        ambiguous = None
        amb_path = cfg.get("ambiguous", {}).get("path")
        if amb_path:
            ambiguous = AmbiguousWords.from_file(_resolve(amb_path, base_dir), lexicon_in_use)

        converter = None
        rules_dir = cfg.get("orthography", {}).get("dir")
        if rules_dir:
            converter = OrthographyConverter(_resolve(rules_dir, base_dir))

        search_cfg = cfg.get("search", {})
        defaults = SearchLimits()
        limits = SearchLimits(
            max_attempts=search_cfg.get("max_attempts", defaults.max_attempts),
            max_suffix_depth=search_cfg.get("max_suffix_depth", defaults.max_suffix_depth),
            max_states=search_cfg.get("max_states", defaults.max_states),
        )

        return cls(
            lexicon,
            irregular=irregular,
            ambiguous=ambiguous,
            converter=converter,
            limits=limits,
        )

    # ── Analysis ─────────────────────────────────────────────────────────

    def analyze(self, word: str, orthography: str = CLASSICAL) -> AnalysisResult:
        """Every valid segmentation of `word`, with English glosses.

        Unknown or unparseable words give a failed result, never an
        exception.  An unknown `orthography` name raises ValueError.
        """
        if orthography not in ORTHOGRAPHIES:
            raise ValueError(f"Unknown orthography {orthography!r} (expected one of {ORTHOGRAPHIES})")

        processed = normalize(word.strip())
        if orthography == MODERN:
            processed = self.converter.to_classical(processed)
        if not processed:
            return AnalysisResult(success=False, error=f"Cannot analyze empty input {word!r}.")

        # 1. Fast paths
        alternatives = self.ambiguous.lookup(processed)
        if alternatives:
            logger.debug("%r: curated ambiguous word", processed)
            parsings = [self._parsing(seq, orthography) for seq in alternatives]
            return AnalysisResult(success=True, parsings=parsings, source="ambiguous")

        invariable = self.lexicon.invariable(processed)
        if invariable is not None:
            logger.debug("%r: invariable %s", processed, invariable.kind)
            parsing = self._parsing((invariable,), orthography)
            return AnalysisResult(success=True, parsings=[parsing], source="invariable")

        irregular = self.irregular.lookup(processed)
        if irregular is not None:
            logger.debug("%r: irregular form of %r", processed, irregular.verb)
            parsing = self._parsing(irregular.morphemes, orthography,
                                    translation=irregular.translation)
            return AnalysisResult(success=True, parsings=[parsing], source="irregular")

        # 2. Imperative context
        imperative = any(processed.startswith(p.form) for p in self.lexicon.imperative_prefixes)

        # 3. Search and retry
        candidates, attempts, excluded = self._search_with_retry(processed, imperative)
        keys = [m.key for m in excluded]
        if not candidates:
            return AnalysisResult(
                success=False,
                error=(f"Failed to find a complete and valid morpheme parse for "
                       f"'{processed}' after {attempts} attempts."),
                attempts=attempts,
                excluded=keys,
            )

        # 4. Finalize
        parsings = [self._parsing(c.records, orthography) for c in candidates]
        parsings = dedupe(self.constraints.filter(parsings))
        return AnalysisResult(success=True, parsings=parsings, source="search",
                              attempts=attempts, excluded=keys)

    def analyze_batch(self, words: Iterable[str],
                      orthography: str = CLASSICAL) -> dict[str, AnalysisResult]:
        return {w: self.analyze(w, orthography) for w in words}

    def _search_with_retry(
        self, word: str, imperative: bool,
    ) -> tuple[list[Candidate], int, list[MorphemeInstance]]:
        """Search, forbidding one more first-pass morpheme after each miss."""
        excluded: list[MorphemeInstance] = []
        identified: list[MorphemeInstance] = []
        attempts = 0

        while True:
            attempts += 1
            context = SearchContext(
                imperative=imperative,
                excluded=frozenset(excluded),
                record=attempts == 1,
            )
            outcome = self.search.run(word, context)
            if attempts == 1:
                identified = outcome.identified

            valid = self.constraints.filter(outcome.candidates)
            logger.debug("%r attempt %d: %d candidate(s), %d valid",
                         word, attempts, len(outcome.candidates), len(valid))
            if valid:
                return valid, attempts, excluded

            nxt = next_exclusion(identified, set(excluded))
            if nxt is None:
                break
            excluded.append(nxt)
            logger.debug("%r: excluding %s", word, nxt.key)

            if len(excluded) >= len(identified) or attempts >= self.limits.max_attempts:
                break

        return [], attempts, excluded

    def _parsing(self, records: Sequence[Morpheme], orthography: str,
                 translation: str | None = None) -> Parsing:
        morphemes = [
            ParsedMorpheme(
                morpheme=self.converter.to_modern(r.form) if orthography == MODERN else r.form,
                record=r,
            )
            for r in records
        ]
        if translation is None:
            translation = self.translator.translate(records)
        return Parsing(morphemes=morphemes, english_translation=translation)

    # ── Introspection ────────────────────────────────────────────────────

    def summary(self) -> str:
        lines = ["Nahuatl morphological analyzer"]
        lines.append("  [lexicon]")
        for sub_line in self.lexicon.summary().split("\n"):
            lines.append(f"    {sub_line}")
        lines.append("  [tables]")
        lines.append(f"    {self.irregular.summary()}")
        lines.append(f"    {self.ambiguous.summary()}")
        lines.append("  [search]")
        lines.append(f"    max_attempts={self.limits.max_attempts} "
                     f"max_suffix_depth={self.limits.max_suffix_depth} "
                     f"max_states={self.limits.max_states}")
        return "\n".join(lines)


# ── Helpers ──────────────────────────────────────────────────────────────────

def dedupe(parsings: Iterable[Parsing]) -> list[Parsing]:
    """Drop parsings whose morpheme signature was already seen."""
    seen = set()
    unique = []
    for p in parsings:
        sig = p.signature()
        if sig in seen:
            continue
        seen.add(sig)
        unique.append(p)
    return unique


def load_config(config_path: str | Path) -> dict:
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")
    with config_path.open("rb") as f:
        return tomllib.load(f)


def _resolve(raw_path: str, base_dir: Path) -> Path:
    p = Path(raw_path)
    return p if p.is_absolute() else base_dir / p
