"""nahuatl-morph: lexicon-driven morphological analyzer for Classical Nahuatl."""

from nahuatl_morph.lexicon import Lexicon, Morpheme, default_lexicon
from nahuatl_morph.orthography import (
    OrthographyConverter, classical_to_modern, modern_to_classical,
)
from nahuatl_morph.state import ParseState
from nahuatl_morph.prefixes import PrefixValidator
from nahuatl_morph.search import BacktrackingSearch, SearchContext, SearchLimits
from nahuatl_morph.constraints import ConstraintValidator
from nahuatl_morph.translator import Translator
from nahuatl_morph.engine import Analyzer, AnalysisResult, Parsing
from nahuatl_morph.coverage import check_coverage, read_word_list

__all__ = [
    "Lexicon", "Morpheme", "default_lexicon",
    "OrthographyConverter", "classical_to_modern", "modern_to_classical",
    "ParseState", "PrefixValidator",
    "BacktrackingSearch", "SearchContext", "SearchLimits",
    "ConstraintValidator", "Translator",
    "Analyzer", "AnalysisResult", "Parsing",
    "check_coverage", "read_word_list",
]
