"""
Context checks for attaching a prefix during left-hand resolution.

Unambiguous prefixes only have to respect slot order.  A surface form
with several readings (e.g. "ti" = you/we, "n" = I/my, "mo" = your/
him-, herself) is additionally checked against the stem already found
and the suffixes chosen on the current branch.  When no stem has been
attached yet the noun/verb decision is deferred: the complete-parse
constraints repeat the check once the whole word is known.
"""

from __future__ import annotations

from typing import Sequence

from nahuatl_morph.lexicon import Lexicon, Morpheme
from nahuatl_morph.state import ParseState

_POSSESSIVE_ROLES = ("possessive", "reflexive")
_CORE_ROLES = ("subject", "object")

# Absolutive endings recognised even if a record lacks the category tag
_ABSOLUTIVE_FORMS = frozenset({"li", "tli", "tl", "tzintli"})


def has_absolutive(suffixes: Sequence[Morpheme]) -> bool:
    return any(
        s.category == "absolutive" or s.form in _ABSOLUTIVE_FORMS for s in suffixes
    )


class PrefixValidator:
    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    # ── Entry points ─────────────────────────────────────────────────────

    def allows(self, prefix: Morpheme, state: ParseState,
               suffixes: Sequence[Morpheme]) -> bool:
        """Whether `prefix` may be attached to `state` on this branch."""
        if self.lexicon.is_ambiguous_prefix(prefix.form):
            return self.is_valid_ambiguous(prefix, state, suffixes)
        return self.is_valid_order(prefix, state)

    def is_valid_order(self, prefix: Morpheme, state: ParseState) -> bool:
        """Slot order: subject before object, one prefix per role."""
        role = getattr(prefix, "role", None)
        existing = state.roles()

        if role == "object" and "subject" in existing:
            return True
        if role == "subject" and "object" in existing:
            return False
        if role in existing:
            return False
        return True

    def is_valid_ambiguous(self, prefix: Morpheme, state: ParseState,
                           suffixes: Sequence[Morpheme]) -> bool:
        role = getattr(prefix, "role", None)
        readings = self.lexicon.prefix_readings(prefix.form)
        roles = {r.role for r in readings}
        subject_readings = {(r.person, r.number) for r in readings if r.role == "subject"}
        crosses_slots = bool(roles & set(_CORE_ROLES)) and bool(roles & set(_POSSESSIVE_ROLES))

        if role == "subject":
            if len(subject_readings) > 1:
                return (self._agreement_allows(prefix, suffixes)
                        and self.is_valid_order(prefix, state))
            if crosses_slots:
                return (self._subject_licensed(state, suffixes)
                        and self.is_valid_order(prefix, state))
            return self.is_valid_order(prefix, state)

        if role == "object":
            return self.is_valid_order(prefix, state)

        if role in _POSSESSIVE_ROLES:
            if role == "possessive" and crosses_slots and not self._possessive_licensed(state, suffixes):
                return False
            return self._possessive_reflexive_allows(prefix, state, suffixes)

        return self.is_valid_order(prefix, state)

    # ── Rules ────────────────────────────────────────────────────────────

    def _agreement_allows(self, prefix: Morpheme, suffixes: Sequence[Morpheme]) -> bool:
        """Subject readings of forms like "ti": we with a plural, you (sg) with a nominalizer."""
        forms = {s.form for s in suffixes}
        reading = (prefix.person, prefix.number)

        if forms & self.lexicon.plural_suffix_forms:
            return reading == ("first", "plural")
        if forms & self.lexicon.nominalizing_suffix_forms:
            return reading == ("second", "singular")
        return reading in (("first", "plural"), ("second", "singular"))

    def _subject_licensed(self, state: ParseState, suffixes: Sequence[Morpheme]) -> bool:
        primary = state.primary_stem
        if primary is None:
            return True

        absolutive = has_absolutive(suffixes)
        if primary.kind == "verb_stem":
            return True
        if primary.kind == "noun_stem":
            irregular = primary.absolutive_suffix is False
            return absolutive or (irregular and not absolutive)
        return False

    def _possessive_licensed(self, state: ParseState, suffixes: Sequence[Morpheme]) -> bool:
        """Possessed nouns drop the absolutive, unless a -huan plural marks them."""
        primary = state.primary_stem
        if primary is None:
            return True
        if primary.kind != "noun_stem":
            return False
        if any(s.form == "huan" for s in suffixes):
            return True
        return not has_absolutive(suffixes)

    def _possessive_reflexive_allows(self, prefix: Morpheme, state: ParseState,
                                     suffixes: Sequence[Morpheme]) -> bool:
        existing = state.roles()
        role = prefix.role

        if role in existing:
            return False
        if role == "reflexive" and "object" in existing:
            return False
        if role == "possessive" and "subject" in existing:
            return False

        primary = state.primary_stem
        noun = primary is not None and primary.kind == "noun_stem"
        verb = primary is not None and primary.kind == "verb_stem"
        nominalized = self.has_nominalizing(suffixes)

        if prefix.used_with == "noun" and not noun and not nominalized:
            return False
        if prefix.used_with == "verb" and (not verb or nominalized):
            return False

        if noun or nominalized:
            return role == "possessive"

        if verb:
            if role != "reflexive":
                return False
            subjects = [p for p in state.prefixes if getattr(p, "role", None) == "subject"]
            if subjects:
                return (prefix.person, prefix.number) == (subjects[0].person, subjects[0].number)
            return (prefix.person, prefix.number) == ("third", "singular")

        return True

    def has_nominalizing(self, suffixes: Sequence[Morpheme]) -> bool:
        return any(
            getattr(s, "nominalizing", False) or s.form in self.lexicon.nominalizing_suffix_forms
            for s in suffixes
        )
