"""
Backtracking segmentation: every way a word splits into
[prefixes] + stem(s) + [suffixes] using lexicon morphemes.

Suffixes are peeled right to left, trying every suffix that ends the
current segment rather than only the longest.  After each peel the left
side is resolved into prefixes and stems by a fixed-point iteration over
ParseStates: stems are matched at the right edge of the remainder first,
and only a state with no matching stem tries prefixes at its left edge.

The search over-generates on purpose.  Candidates are structural only;
ConstraintValidator decides which of them are grammatical.

Usage:
    from nahuatl_morph.search import BacktrackingSearch, SearchContext

    search = BacktrackingSearch(lexicon)
    outcome = search.run("nicochi", SearchContext())
    for cand in outcome.candidates:
        print([m.form for m in cand.records])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from nahuatl_morph.lexicon import Lexicon, Morpheme, STEM_KINDS
from nahuatl_morph.prefixes import PrefixValidator
from nahuatl_morph.state import ParseState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MorphemeInstance:
    """One morpheme at one position of the analyzed word."""

    form: str
    kind: str  # "suffix", "prefix", "verb_stem", "noun_stem"
    position: int  # index of the first character in the word

    @property
    def key(self) -> str:
        return f"{self.form}-{self.kind}-{self.position}"

    @property
    def is_stem(self) -> bool:
        return self.kind in STEM_KINDS

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True)
class Candidate:
    """A structurally complete segmentation, not yet grammar-checked."""

    prefixes: tuple[Morpheme, ...]
    stems: tuple[Morpheme, ...]
    suffixes: tuple[Morpheme, ...]  # left to right

    @property
    def records(self) -> tuple[Morpheme, ...]:
        return self.prefixes + self.stems + self.suffixes


@dataclass(frozen=True, slots=True)
class SearchLimits:
    max_attempts: int = 20  # retry-loop iterations (used by the analyzer)
    max_suffix_depth: int = 16  # suffixes one branch may peel
    max_states: int = 4096  # live states per left-hand resolution


@dataclass(frozen=True, slots=True)
class SearchContext:
    """Per-attempt settings, passed unchanged through the recursion."""

    imperative: bool = False
    excluded: frozenset[MorphemeInstance] = frozenset()
    record: bool = True  # collect identified morphemes (first pass)

    def allows(self, instance: MorphemeInstance) -> bool:
        return instance not in self.excluded


@dataclass(slots=True)
class SearchOutcome:
    candidates: list[Candidate]
    identified: list[MorphemeInstance]  # first-seen order; empty unless recorded
    truncated: bool = False


@dataclass(slots=True)
class _Trace:
    record: bool
    found: dict[MorphemeInstance, None] = field(default_factory=dict)
    truncated: bool = False

    def note(self, instance: MorphemeInstance) -> None:
        if self.record:
            self.found.setdefault(instance, None)


class BacktrackingSearch:
    def __init__(self, lexicon: Lexicon, limits: SearchLimits | None = None,
                 validator: PrefixValidator | None = None):
        self.lexicon = lexicon
        self.limits = limits or SearchLimits()
        self.validator = validator or PrefixValidator(lexicon)

    def run(self, word: str, context: SearchContext | None = None) -> SearchOutcome:
        """All candidates for `word` that avoid the excluded instances."""
        context = context or SearchContext()
        trace = _Trace(record=context.record)

        candidates = self._peel(word, (), context, trace)
        unique = list(dict.fromkeys(candidates))

        if trace.truncated:
            logger.warning(
                "Search space for %r truncated (max_suffix_depth=%d, max_states=%d)",
                word, self.limits.max_suffix_depth, self.limits.max_states,
            )
        logger.debug("Search %r: %d candidate(s), %d identified morpheme(s)",
                     word, len(unique), len(trace.found))
        return SearchOutcome(unique, list(trace.found), trace.truncated)

    # ── Suffix recursion ─────────────────────────────────────────────────

    def _peel(self, segment: str, chain: tuple[Morpheme, ...],
              ctx: SearchContext, trace: _Trace) -> list[Candidate]:
        """`chain` holds the suffixes peeled so far, rightmost first."""
        if not segment:
            return self._accept(self._resolve(ParseState.start(""), chain, ctx, trace), chain)

        results: list[Candidate] = []

        if len(chain) >= self.limits.max_suffix_depth:
            trace.truncated = True
        else:
            tried: set[Morpheme] = set()
            for suffix in self.lexicon.of_kind("suffix"):
                if not segment.endswith(suffix.form):
                    continue
                instance = MorphemeInstance(suffix.form, "suffix", len(segment) - len(suffix.form))
                if not ctx.allows(instance):
                    continue
                trace.note(instance)

                actual = self.lexicon.contextual_suffix(suffix, ctx.imperative)
                if actual in tried:
                    continue
                tried.add(actual)

                remainder = segment[: -len(actual.form)]
                extended = chain + (actual,)

                results.extend(self._seeded(remainder, "verb_stem", extended, ctx, trace))
                results.extend(self._seeded(remainder, "noun_stem", extended, ctx, trace))
                results.extend(self._accept(
                    self._resolve(ParseState.start(remainder), extended, ctx, trace), extended,
                ))
                results.extend(self._peel(remainder, extended, ctx, trace))

        # The whole segment as a prefix/stem chain (zero further suffixes)
        results.extend(self._accept(
            self._resolve(ParseState.start(segment), chain, ctx, trace), chain,
        ))
        return results

    def _seeded(self, segment: str, kind: str, chain: tuple[Morpheme, ...],
                ctx: SearchContext, trace: _Trace) -> list[Candidate]:
        """Take the longest stem of `kind` ending `segment`, then resolve its left."""
        for stem in self.lexicon.of_kind(kind):
            if not segment.endswith(stem.form):
                continue
            instance = MorphemeInstance(stem.form, stem.kind, len(segment) - len(stem.form))
            if not ctx.allows(instance):
                continue
            trace.note(instance)
            start = ParseState.start(segment[: -len(stem.form)], stem)
            return self._accept(self._resolve(start, chain, ctx, trace), chain)
        return []

    @staticmethod
    def _accept(states: Iterable[ParseState], chain: tuple[Morpheme, ...]) -> list[Candidate]:
        suffixes = tuple(reversed(chain))
        return [
            Candidate(s.prefixes, s.stems, suffixes)
            for s in states
            if not s.has_remainder and (s.has_stem or s.has_prefix)
        ]

    # ── Left-hand resolution ─────────────────────────────────────────────

    def _resolve(self, initial: ParseState, chain: tuple[Morpheme, ...],
                 ctx: SearchContext, trace: _Trace) -> list[ParseState]:
        states = [initial]
        progressed = True

        while progressed:
            progressed = False
            next_states: list[ParseState] = []

            for state in states:
                if not state.has_remainder:
                    next_states.append(state)
                    continue

                grown = self._stem_matches(state, ctx, trace)
                if not grown:
                    grown = self._prefix_matches(state, chain, ctx, trace)
                if grown:
                    next_states.extend(grown)
                    progressed = True
                else:
                    next_states.append(state)

            if len(next_states) > self.limits.max_states:
                trace.truncated = True
                next_states = next_states[: self.limits.max_states]
            states = next_states

        return [s for s in states if s.has_stem or s.has_prefix]

    def _stem_matches(self, state: ParseState, ctx: SearchContext,
                      trace: _Trace) -> list[ParseState]:
        matches = []
        for stem in self.lexicon.stems:
            if not state.remainder.endswith(stem.form):
                continue
            instance = MorphemeInstance(stem.form, stem.kind, state.stem_position(stem))
            if not ctx.allows(instance):
                continue
            trace.note(instance)
            matches.append(state.with_stem(stem))
        return matches

    def _prefix_matches(self, state: ParseState, chain: tuple[Morpheme, ...],
                        ctx: SearchContext, trace: _Trace) -> list[ParseState]:
        matches = []
        for prefix in self.lexicon.prefix_candidates:
            if not state.remainder.startswith(prefix.form):
                continue
            instance = MorphemeInstance(prefix.form, prefix.kind, state.offset)
            if not ctx.allows(instance):
                continue
            if not self.validator.allows(prefix, state, chain):
                continue
            trace.note(instance)
            matches.append(state.with_prefix(prefix))
        return matches


# ── Exclusion order for the retry loop ───────────────────────────────────────

def next_exclusion(identified: list[MorphemeInstance],
                   excluded: set[MorphemeInstance] | frozenset[MorphemeInstance],
                   ) -> MorphemeInstance | None:
    """Next instance to forbid: suffixes right to left, then stems right
    to left, then prefixes left to right.  None once all are excluded.

    This is a heuristic.  A parse reachable only by forbidding some other
    combination of morphemes is not found.
    """
    by_right = sorted(identified, key=lambda m: m.position, reverse=True)

    for m in by_right:
        if m.kind == "suffix" and m not in excluded:
            return m
    for m in by_right:
        if m.is_stem and m not in excluded:
            return m
    for m in sorted(identified, key=lambda m: m.position):
        if m.kind == "prefix" and m not in excluded:
            return m
    return None
