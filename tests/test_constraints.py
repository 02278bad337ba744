"""Tests for the complete-parse grammar checks (constraints.py)."""

import pytest

from nahuatl_morph.constraints import ConstraintValidator
from nahuatl_morph.search import Candidate


@pytest.fixture
def validator(lexicon):
    return ConstraintValidator(lexicon)


@pytest.fixture
def rec(lexicon):
    """rec("mo", "prefix", role="reflexive", person="third") → lexicon record."""
    def _rec(form, kind, **attrs):
        found = lexicon.find(form, kind, **attrs)
        assert found is not None, f"lexicon lacks {form}/{kind} {attrs}"
        return found
    return _rec


# ── Well-formed parses ────────────────────────────────────────────────────────

def test_subject_verb(validator, rec):
    assert validator.is_valid([rec("ni", "prefix"), rec("cochi", "verb_stem")])


def test_noun_absolutive(validator, rec):
    assert validator.is_valid([rec("cal", "noun_stem"), rec("li", "suffix")])


def test_possessed_bare_inanimate(validator, rec):
    assert validator.is_valid([rec("no", "prefix", role="possessive"), rec("cal", "noun_stem")])


def test_third_person_reflexive_without_subject(validator, rec):
    refl = rec("mo", "prefix", role="reflexive", person="third", number="singular")
    assert validator.is_valid([refl, rec("itta", "verb_stem")])


def test_reflexive_agreeing_with_subject(validator, rec):
    refl = rec("no", "prefix", role="reflexive")
    assert validator.is_valid([rec("ni", "prefix"), refl, rec("itta", "verb_stem")])


def test_animate_plural(validator, rec):
    assert validator.is_valid([rec("tlaca", "noun_stem"), rec("meh", "suffix")])


# ── Violations ────────────────────────────────────────────────────────────────

def test_no_stem(validator, rec):
    assert validator.violation([rec("ni", "prefix")]) == "no stem"


def test_verb_with_absolutive(validator, rec):
    reason = validator.violation([rec("cochi", "verb_stem"), rec("li", "suffix")])
    assert reason == "verb stem with absolutive suffix"


def test_noun_with_object(validator, rec):
    reason = validator.violation([rec("qui", "prefix"), rec("cal", "noun_stem"), rec("li", "suffix")])
    assert reason == "noun stem with object prefix"


def test_inanimate_plural(validator, rec):
    reason = validator.violation([rec("cal", "noun_stem"), rec("meh", "suffix")])
    assert reason == "inanimate noun with plural suffix"


def test_bare_inanimate(validator, rec):
    reason = validator.violation([rec("cal", "noun_stem")])
    assert reason == "bare inanimate noun without absolutive"


def test_reflexive_with_object(validator, rec):
    refl = rec("mo", "prefix", role="reflexive", person="third", number="singular")
    reason = validator.violation([rec("qui", "prefix"), refl, rec("itta", "verb_stem")])
    assert reason == "reflexive with object"


def test_subject_with_possessive(validator, rec):
    poss = rec("no", "prefix", role="possessive")
    reason = validator.violation([rec("ni", "prefix"), poss, rec("cal", "noun_stem"), rec("li", "suffix")])
    assert reason == "subject with possessive"


def test_object_before_subject(validator, rec):
    reason = validator.violation([rec("qui", "prefix"), rec("ni", "prefix"), rec("itta", "verb_stem")])
    assert reason == "object before subject"


def test_unspecified_thing_and_person(validator, rec):
    reason = validator.violation([rec("tla", "prefix"), rec("te", "prefix"), rec("namaca", "verb_stem")])
    assert reason == "unspecified thing with unspecified person"


def test_unspecified_thing_and_specific_object(validator, rec):
    reason = validator.violation([rec("tla", "prefix"), rec("qui", "prefix"), rec("namaca", "verb_stem")])
    assert reason == "unspecified thing with specific object"


def test_two_plural_suffixes(validator, rec):
    reason = validator.violation([rec("coyo", "noun_stem"), rec("meh", "suffix"), rec("h", "suffix")])
    assert reason == "more than one plural suffix"


def test_noun_prefix_on_verb(validator, rec):
    reason = validator.violation([rec("i", "prefix"), rec("cochi", "verb_stem")])
    assert reason == "'i' needs a noun"


def test_reflexive_disagrees_with_subject(validator, rec):
    refl = rec("mo", "prefix", role="reflexive", person="third", number="singular")
    reason = validator.violation([rec("ni", "prefix"), refl, rec("itta", "verb_stem")])
    assert reason == "reflexive disagrees with subject"


def test_reflexive_without_subject_not_third_singular(validator, rec):
    refl = rec("no", "prefix", role="reflexive")
    reason = validator.violation([refl, rec("itta", "verb_stem")])
    assert reason == "reflexive without subject must be third singular"


def test_possessive_suffix_needs_possessor(validator, rec):
    reason = validator.violation([rec("tlaca", "noun_stem"), rec("huan", "suffix")])
    assert reason == "possessive suffix without possessor"


# ── filter ────────────────────────────────────────────────────────────────────

def test_filter_keeps_valid_in_order(validator, rec):
    good = Candidate((rec("ni", "prefix"),), (rec("cochi", "verb_stem"),), ())
    bad = Candidate((), (rec("cal", "noun_stem"),), (rec("meh", "suffix"),))
    also_good = Candidate((), (rec("cal", "noun_stem"),), (rec("li", "suffix"),))
    assert validator.filter([good, bad, also_good]) == [good, also_good]


def test_filter_empty(validator):
    assert validator.filter([]) == []
