"""Tests for English gloss generation (translator.py)."""

import pytest

from nahuatl_morph.lexicon import VerbStem
from nahuatl_morph.translator import (
    Translator, agent_noun, article, past_participle, pluralize, progressive, third_singular,
)


@pytest.fixture
def gloss(lexicon):
    """gloss("ni", "cochi") → translation, picking records by form.

    A (form, attrs) tuple selects a specific reading.
    """
    kinds = ("prefix", "verb_stem", "noun_stem", "suffix")
    translator = Translator()

    def _find(ref):
        form, attrs = ref if isinstance(ref, tuple) else (ref, {})
        for kind in kinds:
            found = lexicon.find(form, kind, **attrs)
            if found is not None:
                return found
        raise AssertionError(f"lexicon lacks {ref!r}")

    def _gloss(*specs):
        return translator.translate([_find(s) for s in specs])
    return _gloss


# ── English helpers ───────────────────────────────────────────────────────────

def test_article():
    assert article("house") == "a"
    assert article("eater") == "an"


def test_pluralize():
    assert pluralize("house") == "houses"
    assert pluralize("city") == "cities"
    assert pluralize("box") == "boxes"
    assert pluralize("day") == "days"


def test_third_singular():
    assert third_singular("see") == "sees"
    assert third_singular("cry") == "cries"
    assert third_singular("go") == "goes"
    assert third_singular("watch") == "watches"


def test_verb_forms_prefer_lexicon_fields():
    stem = VerbStem(form="cochi", english="sleep", past_participle="slept",
                    progressive="sleeping", agent="sleeper")
    assert past_participle(stem) == "slept"
    assert progressive(stem) == "sleeping"
    assert agent_noun(stem) == "sleeper"


def test_verb_forms_fallback():
    stem = VerbStem(form="x", english="bake")
    assert past_participle(stem) == "baked"
    assert progressive(stem) == "baking"
    assert agent_noun(stem) == "baker"
    assert past_participle(VerbStem(form="x", english="walk")) == "walked"


# ── Verbs ─────────────────────────────────────────────────────────────────────

def test_subject_verb(gloss):
    assert gloss("ni", "cochi") == "I sleep"


def test_bare_verb_is_third_singular(gloss):
    assert gloss("cochi") == "he/she/it sleeps"


def test_ti_readings(gloss):
    assert gloss(("ti", {"person": "second"}), "cochi") == "you (sg) sleep"
    assert gloss(("ti", {"person": "first"}), "cochi") == "we sleep"


def test_object(gloss):
    assert gloss("ni", "qui", "itta") == "I see him/her/it"


def test_unspecified_object(gloss):
    assert gloss("ni", "tla", "namaca") == "I sell something"


def test_reflexive(gloss):
    refl = ("mo", {"role": "reflexive", "person": "third", "number": "singular"})
    assert gloss(refl, "itta") == "he/she/it sees himself/herself/itself"
    assert gloss("ni", ("no", {"role": "reflexive"}), "itta") == "I see myself"


def test_imperfect(gloss):
    assert gloss("ni", "cochi", "ya") == "I was sleeping"


def test_imperative(gloss):
    assert gloss("xi", "cochi") == "(you) sleep"


def test_plural_imperative(gloss):
    assert gloss("xi", "cochi", ("can", {"category": "plural"})) == "(you all) sleep"


# ── Nouns ─────────────────────────────────────────────────────────────────────

def test_countable_noun_gets_article(gloss):
    assert gloss("cal", "li") == "(it is a) house"


def test_uncountable_noun(gloss):
    assert gloss("a", "tl") == "(it is) water"


def test_possessed_noun(gloss):
    assert gloss(("no", {"role": "possessive"}), "cal") == "(it is) my house"


def test_locative_noun(gloss):
    locative = ("can", {"category": "locative"})
    assert gloss("cal", locative) == "(it is a) house place"
    assert gloss(("no", {"role": "possessive"}), "cal", locative) == "(it is) my house place"


def test_plural_noun_irregular_english(gloss):
    assert gloss("tlaca", "meh") == "(they are) people"
    assert gloss("cihua", "h") == "(they are) women"


def test_possessed_plural(gloss):
    assert gloss(("no", {"role": "possessive"}), "tlaca", "huan") == "(they are) my people"


def test_subject_with_noun(gloss):
    assert gloss("ni", "tlaca", "tl") == "I am a person"
    assert gloss(("ti", {"person": "second"}), "tlaca", "tl") == "you (sg) are a person"


# ── Derived forms ─────────────────────────────────────────────────────────────

def test_agentive(gloss):
    assert gloss("cochi", ("ni", {"category": "agentive"})) == "(it is a) sleeper"


def test_participle(gloss):
    assert gloss("chihua", "lli") == "(it is) made"


def test_adjectival(gloss):
    assert gloss("mich", "tic") == "(it is) fish-like"


# ── Misc ──────────────────────────────────────────────────────────────────────

def test_invariable(lexicon):
    assert Translator().translate([lexicon.invariable("nican")]) == "here"


def test_callable(lexicon):
    records = [lexicon.find("ni", "prefix"), lexicon.find("cochi", "verb_stem")]
    t = Translator()
    assert t(records) == t.translate(records) == "I sleep"


def test_deterministic(gloss):
    assert gloss("no", "cal") == gloss("no", "cal")
