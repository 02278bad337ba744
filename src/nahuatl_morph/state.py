"""Immutable snapshot of a partial left-hand analysis."""

from __future__ import annotations

from dataclasses import dataclass, replace

from nahuatl_morph.lexicon import Morpheme


@dataclass(frozen=True, slots=True)
class ParseState:
    """Prefixes and stems chosen so far plus the unconsumed substring.

    Prefixes are consumed from the left edge of ``remainder`` and stems
    from its right edge, so ``prefixes + remainder + stems`` always spells
    the segment being resolved.  ``offset`` is the index of
    ``remainder[0]`` in the analyzed word.
    """

    prefixes: tuple[Morpheme, ...] = ()
    stems: tuple[Morpheme, ...] = ()
    remainder: str = ""
    offset: int = 0

    @classmethod
    def start(cls, remainder: str, stem: Morpheme | None = None) -> ParseState:
        return cls(stems=(stem,) if stem is not None else (), remainder=remainder)

    def with_prefix(self, prefix: Morpheme) -> ParseState:
        n = len(prefix.form)
        return replace(
            self,
            prefixes=self.prefixes + (prefix,),
            remainder=self.remainder[n:],
            offset=self.offset + n,
        )

    def with_stem(self, stem: Morpheme) -> ParseState:
        return replace(
            self,
            stems=(stem,) + self.stems,
            remainder=self.remainder[: -len(stem.form)],
        )

    def stem_position(self, stem: Morpheme) -> int:
        """Word index at which `stem` would start if taken from the right edge."""
        return self.offset + len(self.remainder) - len(stem.form)

    @property
    def has_stem(self) -> bool:
        return bool(self.stems)

    @property
    def has_prefix(self) -> bool:
        return bool(self.prefixes)

    @property
    def has_remainder(self) -> bool:
        return bool(self.remainder)

    @property
    def primary_stem(self) -> Morpheme | None:
        """The rightmost stem, which decides noun vs. verb."""
        return self.stems[-1] if self.stems else None

    def roles(self) -> list[str | None]:
        return [getattr(p, "role", None) for p in self.prefixes]
