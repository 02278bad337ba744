"""
Grammar checks on complete parses.

These run after the search, on whole morpheme sequences, for the rules
that cannot be decided while a branch is still being built: stem type
against affixes, animacy, plural and role exclusivity, role order and
reflexive agreement.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence, TypeVar

from nahuatl_morph.lexicon import Lexicon, Morpheme, STEM_KINDS

logger = logging.getLogger(__name__)


class HasRecords(Protocol):
    @property
    def records(self) -> Sequence[Morpheme]: ...


T = TypeVar("T", bound=HasRecords)


def _role(m: Morpheme) -> str | None:
    return getattr(m, "role", None)


def _is_plural(m: Morpheme) -> bool:
    return m.category in ("plural", "plural_marker")


class ConstraintValidator:
    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def filter(self, parses: Iterable[T]) -> list[T]:
        """Keep the parses whose morpheme sequence is well-formed."""
        kept = []
        for parse in parses:
            reason = self.violation(parse.records)
            if reason is None:
                kept.append(parse)
            else:
                logger.debug("Rejected %s: %s",
                             "+".join(m.form for m in parse.records), reason)
        return kept

    def is_valid(self, morphemes: Sequence[Morpheme]) -> bool:
        return self.violation(morphemes) is None

    def violation(self, morphemes: Sequence[Morpheme]) -> str | None:
        """The first rule `morphemes` breaks, or None if it is well-formed."""
        prefixes = [m for m in morphemes if m.kind == "prefix"]
        stems = [m for m in morphemes if m.kind in STEM_KINDS]
        suffixes = [m for m in morphemes if m.kind == "suffix"]

        if not stems:
            return "no stem"
        primary = stems[-1]

        return (
            self._stem_rules(primary, prefixes, suffixes)
            or self._inanimate_rules(primary, prefixes, suffixes)
            or self._prefix_rules(prefixes)
            or self._suffix_rules(suffixes)
            or self._context_rules(primary, prefixes, suffixes)
        )

    # ── Rules ────────────────────────────────────────────────────────────

    @staticmethod
    def _stem_rules(primary, prefixes, suffixes) -> str | None:
        if primary.kind == "verb_stem" and any(s.category == "absolutive" for s in suffixes):
            return "verb stem with absolutive suffix"
        if primary.kind == "noun_stem" and any(_role(p) == "object" for p in prefixes):
            return "noun stem with object prefix"
        return None

    @staticmethod
    def _inanimate_rules(primary, prefixes, suffixes) -> str | None:
        if primary.kind != "noun_stem" or primary.animate:
            return None
        if any(_is_plural(s) for s in suffixes):
            return "inanimate noun with plural suffix"
        possessed = any(_role(p) == "possessive" for p in prefixes)
        if not suffixes and primary.absolutive_suffix is not False and not possessed:
            return "bare inanimate noun without absolutive"
        return None

    @staticmethod
    def _prefix_rules(prefixes) -> str | None:
        roles = [_role(p) for p in prefixes]

        if "reflexive" in roles and "object" in roles:
            return "reflexive with object"
        if "subject" in roles and "possessive" in roles:
            return "subject with possessive"
        if "subject" in roles and "object" in roles:
            if roles.index("subject") > roles.index("object"):
                return "object before subject"

        objects = [p for p in prefixes if _role(p) == "object"]
        if any(p.category == "indefinite_thing" for p in objects):
            for p in objects:
                if p.category == "indefinite_person":
                    return "unspecified thing with unspecified person"
                if (p.person, p.number) == ("third", "singular"):
                    return "unspecified thing with specific object"
        return None

    @staticmethod
    def _suffix_rules(suffixes) -> str | None:
        if sum(1 for s in suffixes if _is_plural(s)) > 1:
            return "more than one plural suffix"
        return None

    def _context_rules(self, primary, prefixes, suffixes) -> str | None:
        noun = primary.kind == "noun_stem"
        verb = primary.kind == "verb_stem"
        nominalized = any(
            getattr(s, "nominalizing", False) or s.form in self.lexicon.nominalizing_suffix_forms
            for s in suffixes
        )

        for p in prefixes:
            used_with = getattr(p, "used_with", None)
            if used_with == "noun" and not noun and not nominalized:
                return f"'{p.form}' needs a noun"
            if used_with == "verb" and (not verb or nominalized):
                return f"'{p.form}' needs a verb"

        subjects = [p for p in prefixes if _role(p) == "subject"]
        for refl in (p for p in prefixes if _role(p) == "reflexive"):
            agreement = (refl.person, refl.number)
            if subjects:
                if not any((s.person, s.number) == agreement for s in subjects):
                    return "reflexive disagrees with subject"
            elif agreement != ("third", "singular"):
                return "reflexive without subject must be third singular"

        if any(s.category == "possessive" for s in suffixes):
            if not any(_role(p) == "possessive" for p in prefixes):
                return "possessive suffix without possessor"
        return None
