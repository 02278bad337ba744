"""
Template English glosses for validated morpheme sequences.

    ni + cochi            → "I sleep"
    no + cal              → "(it is) my house"
    ni + tlaca + tl       → "I am a person"
    tlaca + meh           → "(they are) people"

Deterministic and side-effect free; it never looks anything up beyond
the records it is given.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from nahuatl_morph.lexicon import Morpheme

_VOWELS = "aeiou"
_SIBILANT_ENDINGS = ("s", "sh", "ch", "x", "z")


# ── English helpers ──────────────────────────────────────────────────────────

def article(word: str) -> str:
    return "an" if word.strip()[:1].lower() in _VOWELS else "a"


def pluralize(word: str) -> str:
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    if word.endswith(_SIBILANT_ENDINGS):
        return word + "es"
    return word + "s"


def third_singular(verb: str) -> str:
    if verb.endswith("s") or verb in ("is", "are"):
        return verb
    if verb.endswith("y") and len(verb) > 1 and verb[-2] not in _VOWELS:
        return verb[:-1] + "ies"
    if verb.endswith(_SIBILANT_ENDINGS) or verb.endswith("o"):
        return verb + "es"
    return verb + "s"


def progressive(stem: Morpheme) -> str:
    if stem.progressive:
        return stem.progressive
    english = stem.english
    if english.endswith("e") and not english.endswith("ee"):
        return english[:-1] + "ing"
    return english + "ing"


def past_participle(stem: Morpheme) -> str:
    if stem.past_participle:
        return stem.past_participle
    english = stem.english
    return english + "d" if english.endswith("e") else english + "ed"


def agent_noun(stem: Morpheme) -> str:
    if stem.agent:
        return stem.agent
    english = stem.english
    return english + "r" if english.endswith("e") else english + "er"


def noun_plural(stem: Morpheme) -> str:
    return stem.english_plural or pluralize(stem.english)


# ── Morpheme summary ─────────────────────────────────────────────────────────

@dataclass(slots=True)
class _Summary:
    subject: Morpheme | None = None
    object: Morpheme | None = None
    possessive: Morpheme | None = None
    reflexive: Morpheme | None = None
    negation: Morpheme | None = None
    imperative: Morpheme | None = None
    verb: Morpheme | None = None
    nouns: list[Morpheme] = field(default_factory=list)
    plural: bool = False
    imperfect: bool = False
    participle: bool = False  # -lli
    agentive: Morpheme | None = None  # -ni
    nominalizer: Morpheme | None = None  # other non-absolutive nominalizers
    adjectival: Morpheme | None = None  # -tic
    locative: Morpheme | None = None  # -can
    something: bool = False  # tla-
    someone: bool = False  # te-

    @property
    def nominalized(self) -> bool:
        return bool(self.agentive or self.nominalizer or self.participle)


def summarize(morphemes: Sequence[Morpheme]) -> _Summary:
    s = _Summary()
    for m in morphemes:
        kind = m.kind
        if kind == "prefix":
            role = m.role
            if m.category == "indefinite_thing":
                s.something = True
            elif m.category == "indefinite_person":
                s.someone = True
            elif m.category == "imperative":
                s.imperative = m
            elif role in ("subject", "object", "possessive", "reflexive", "negation"):
                setattr(s, role, m)
        elif kind == "verb_stem":
            s.verb = m
        elif kind == "noun_stem":
            s.nouns.append(m)
        elif kind == "suffix":
            if m.category in ("plural", "plural_marker") or m.number == "plural":
                s.plural = True
            if m.category == "imperfect":
                s.imperfect = True
            if m.category == "adjectival":
                s.adjectival = m
            elif m.category == "participle":
                s.participle = True
            elif m.category == "locative":
                s.locative = m
            elif m.category == "agentive":
                s.agentive = m
            elif m.nominalizing and m.category != "absolutive":
                s.nominalizer = m
    return s


# ── Translator ───────────────────────────────────────────────────────────────

class Translator:
    """Builds one gloss per morpheme sequence."""

    def translate(self, morphemes: Sequence[Morpheme]) -> str:
        s = summarize(morphemes)
        core, wrapped = self._core(s, morphemes)
        text = self._finalize(s, core, wrapped)
        return re.sub(r"\s+", " ", text).strip()

    def __call__(self, morphemes: Sequence[Morpheme]) -> str:
        return self.translate(morphemes)

    # ── Core phrase ──────────────────────────────────────────────────────

    def _core(self, s: _Summary, morphemes: Sequence[Morpheme]) -> tuple[str, bool]:
        head = ""
        if s.negation:
            head += "not "
        if s.imperative:
            head += ("(you all)" if s.plural else s.imperative.english) + " "

        if s.adjectival:
            base = [n.english for n in s.nouns] or ([s.verb.english] if s.verb else [])
            text, wrapped = "-".join(base) + (s.adjectival.english_suffix or "-like"), True
        elif s.participle and s.verb:
            text = past_participle(s.verb)
            if s.something:
                text = "something " + text
            wrapped = True
        elif s.agentive and s.verb:
            agent = agent_noun(s.verb)
            if s.plural:
                agent = pluralize(agent)
            text = "-".join([n.english for n in s.nouns] + [agent])
            wrapped = True
        elif s.verb and not s.nominalized:
            text, wrapped = self._verb_phrase(s), False
        elif s.nouns:
            text, wrapped = self._noun_phrase(s), True
        elif s.nominalizer and s.verb:
            text = s.verb.english + (s.nominalizer.english_suffix or "")
            if s.plural:
                text = pluralize(text)
            wrapped = True
        else:
            text = " ".join(m.english or m.form for m in morphemes)
            wrapped = False

        if s.object and not s.adjectival:
            text += " " + s.object.english
        if s.possessive:
            text = f"{s.possessive.english} {text}"
            wrapped = True
        if s.reflexive and not s.adjectival:
            text += " " + s.reflexive.english

        return head + text, wrapped

    def _verb_phrase(self, s: _Summary) -> str:
        if s.imperfect:
            aux = "were" if self._plural_subject(s) else "was"
            verb = f"{aux} {progressive(s.verb)}"
        else:
            verb = s.verb.english
            if self._third_singular_subject(s):
                verb = third_singular(verb)

        if s.nouns:
            noun = s.nouns[-1].english
            return f"{verb} like {article(noun)} {noun}"
        if s.something:
            verb += " something"
        elif s.someone:
            verb += " someone"
        return verb

    @staticmethod
    def _noun_phrase(s: _Summary) -> str:
        parts = [n.english for n in s.nouns[:-1]]
        last = s.nouns[-1]
        parts.append(noun_plural(last) if s.plural else last.english)
        phrase = "-".join(parts)
        if s.locative and s.locative.english:
            phrase += " " + s.locative.english
        return phrase

    @staticmethod
    def _third_singular_subject(s: _Summary) -> bool:
        if s.imperative or s.plural:
            return False
        return s.subject is None or (s.subject.person, s.subject.number) == ("third", "singular")

    @staticmethod
    def _plural_subject(s: _Summary) -> bool:
        if s.subject is None:
            return s.plural
        return s.subject.number == "plural" or s.subject.person == "second"

    # ── Subject and wrapper ──────────────────────────────────────────────

    def _finalize(self, s: _Summary, core: str, wrapped: bool) -> str:
        if s.subject:
            return self._explicit_subject(s, core)
        if s.imperative:
            return core

        if wrapped:
            pronoun, copula = ("they", "are") if s.plural else ("it", "is")
            art = ""
            if self._wants_article(s):
                art = " " + article(core.split(" ")[0])
            return f"({pronoun} {copula}{art}) {core}"
        if s.verb:
            return f"{'they' if s.plural else 'he/she/it'} {core}"
        return core

    def _explicit_subject(self, s: _Summary, core: str) -> str:
        subject = s.subject.english or "he/she/it"
        if s.verb and not s.nominalized and not s.adjectival:
            return f"{subject} {core}"
        if s.nouns or s.nominalized or s.adjectival:
            art = ""
            if self._wants_article(s):
                art = " " + article(core.split(" ")[0])
            return f"{subject} {self._copula(s.subject)}{art} {core}"
        return f"{subject} {core}"

    @staticmethod
    def _copula(subject: Morpheme) -> str:
        if (subject.person, subject.number) == ("first", "singular"):
            return "am"
        if (subject.person, subject.number) == ("third", "singular"):
            return "is"
        return "are"

    @staticmethod
    def _wants_article(s: _Summary) -> bool:
        if s.something or s.someone or s.possessive or s.participle or s.adjectival:
            return False
        if s.plural:
            return False
        if s.nouns and not s.verb:
            return bool(s.nouns[-1].countable)
        if s.agentive or s.nominalizer:
            return bool((s.agentive or s.nominalizer).countable)
        return False
