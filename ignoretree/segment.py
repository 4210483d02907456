from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field

from ignoretree.tokens import (
    AnyCharToken,
    CharClassToken,
    DoubleStarToken,
    LiteralToken,
    Segment,
    StarToken,
)

Unit = Annotated[
    Union[LiteralToken, AnyCharToken, CharClassToken, StarToken],
    Field(discriminator="kind"),
]


class SegmentMatcher(BaseModel):
    """
    Compiled glob for a single path component.

    Literal runs are stored one character per unit so that the matcher
    only has to deal with single-character units and `*`.
    """

    model_config = ConfigDict(frozen=True)

    units: tuple[Unit, ...]

    def matches(self, name: str) -> bool:
        """
        Check whether a path component matches this glob.

        A `*` consumes any run of characters other than `/`. On a mismatch
        the most recent `*` is made to swallow one more character and
        matching resumes right after it.

        Args:
            name (str): One path component.

        Returns:
            bool: True if the whole component matches.
        """
        units = self.units
        u = n = 0
        star_u, star_n = -1, 0
        while n < len(name):
            if u < len(units) and isinstance(units[u], StarToken):
                star_u, star_n = u, n
                u += 1
            elif u < len(units) and units[u].accepts(name[n]):
                u += 1
                n += 1
            elif star_u >= 0 and name[star_n] != "/":
                star_n += 1
                u, n = star_u + 1, star_n
            else:
                return False
        while u < len(units) and isinstance(units[u], StarToken):
            u += 1
        return u == len(units)


def compile_segment(segment: Segment) -> SegmentMatcher:
    """
    Compile one pattern segment into a SegmentMatcher.

    Args:
        segment (Segment): Tokens of one path component. Must not be `**`,
            which spans components and is handled by the pattern compiler.

    Returns:
        SegmentMatcher: The compiled matcher.
    """
    units: list[Unit] = []
    for token in segment:
        if isinstance(token, DoubleStarToken):
            raise ValueError("'**' spans path components and has no segment matcher")
        if isinstance(token, LiteralToken):
            units.extend(LiteralToken(text=char) for char in token.text)
        else:
            units.append(token)
    return SegmentMatcher(units=tuple(units))


MATCH_ANY_SEGMENT = SegmentMatcher(units=(StarToken(),))
