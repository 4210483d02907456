"""Glob tokens that make up one segment of an ignore pattern."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    def accepts(self, char: str) -> bool:
        """
        Check whether this token consumes exactly the given character.

        Wildcards spanning several characters never consume a single one on
        their own; the segment matcher handles `*` itself.
        """
        return False


class LiteralToken(_Token):
    kind: Literal["literal"] = "literal"
    text: str

    def accepts(self, char: str) -> bool:
        return self.text == char


class StarToken(_Token):
    kind: Literal["star"] = "star"


class AnyCharToken(_Token):
    kind: Literal["any_char"] = "any_char"

    def accepts(self, char: str) -> bool:
        return char != "/"


class CharClassToken(_Token):
    kind: Literal["char_class"] = "char_class"
    chars: frozenset[str] = frozenset()
    ranges: tuple[tuple[str, str], ...] = ()
    negated: bool = False

    def accepts(self, char: str) -> bool:
        if char == "/":
            return False
        hit = char in self.chars or any(lo <= char <= hi for lo, hi in self.ranges)
        return hit != self.negated


class DoubleStarToken(_Token):
    kind: Literal["double_star"] = "double_star"


SegmentToken = Annotated[
    Union[LiteralToken, StarToken, AnyCharToken, CharClassToken, DoubleStarToken],
    Field(discriminator="kind"),
]

# One path component of a pattern; `**` is the one-element segment (DoubleStarToken(),)
Segment = tuple[SegmentToken, ...]


def is_double_star(segment: Segment) -> bool:
    return len(segment) == 1 and isinstance(segment[0], DoubleStarToken)
