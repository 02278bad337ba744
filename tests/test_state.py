"""Tests for ParseState (state.py)."""

import pytest

from nahuatl_morph.state import ParseState


def _rec(lex, form, kind, **attrs):
    rec = lex.find(form, kind, **attrs)
    assert rec is not None, f"fixture lexicon lacks {form}/{kind}"
    return rec


def test_start_defaults():
    s = ParseState.start("nicochi")
    assert s.remainder == "nicochi"
    assert s.offset == 0
    assert not s.has_stem
    assert not s.has_prefix
    assert s.has_remainder


def test_start_with_stem(small_lexicon):
    cochi = _rec(small_lexicon, "cochi", "verb_stem")
    s = ParseState.start("ni", cochi)
    assert s.stems == (cochi,)
    assert s.primary_stem is cochi


def test_with_stem_consumes_right_edge(small_lexicon):
    cochi = _rec(small_lexicon, "cochi", "verb_stem")
    s = ParseState.start("nicochi").with_stem(cochi)
    assert s.remainder == "ni"
    assert s.stems == (cochi,)
    assert s.offset == 0


def test_with_prefix_consumes_left_edge(small_lexicon):
    ni = _rec(small_lexicon, "ni", "prefix")
    s = ParseState.start("nicochi").with_prefix(ni)
    assert s.remainder == "cochi"
    assert s.offset == 2
    assert s.roles() == ["subject"]


def test_states_are_immutable(small_lexicon):
    ni = _rec(small_lexicon, "ni", "prefix")
    s = ParseState.start("nicochi")
    s.with_prefix(ni)
    assert s.remainder == "nicochi"
    with pytest.raises(AttributeError):
        s.remainder = ""


def test_later_stems_are_prepended(small_lexicon):
    cochi = _rec(small_lexicon, "cochi", "verb_stem")
    coyo = _rec(small_lexicon, "coyo", "noun_stem")
    s = ParseState.start("coyocochi").with_stem(cochi).with_stem(coyo)
    assert [m.form for m in s.stems] == ["coyo", "cochi"]
    assert s.primary_stem is cochi
    assert not s.has_remainder


def test_stem_position_is_absolute(small_lexicon):
    ni = _rec(small_lexicon, "ni", "prefix")
    cochi = _rec(small_lexicon, "cochi", "verb_stem")
    s = ParseState.start("nicochi")
    assert s.stem_position(cochi) == 2
    assert s.with_prefix(ni).stem_position(cochi) == 2


def test_prefixes_spell_segment(small_lexicon):
    ni = _rec(small_lexicon, "ni", "prefix")
    qui = _rec(small_lexicon, "qui", "prefix")
    itta = _rec(small_lexicon, "itta", "verb_stem")
    s = ParseState.start("niquiitta").with_stem(itta).with_prefix(ni).with_prefix(qui)
    spelled = "".join(m.form for m in s.prefixes) + s.remainder + "".join(m.form for m in s.stems)
    assert spelled == "niquiitta"
    assert s.roles() == ["subject", "object"]
