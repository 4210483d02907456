from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from ignoretree.parser import Pattern
from ignoretree.segment import MATCH_ANY_SEGMENT, SegmentMatcher, compile_segment
from ignoretree.tokens import is_double_star


class Step(BaseModel):
    """
    One step of a compiled rule.

    An `exact` step consumes exactly one path segment accepted by its
    matcher; an `any` step consumes zero or more segments.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["exact", "any"]
    matcher: Optional[SegmentMatcher] = None


ANY_SEGMENTS = Step(kind="any")


def _exact(matcher: SegmentMatcher) -> Step:
    return Step(kind="exact", matcher=matcher)


class CompiledRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    line_number: int
    negated: bool
    directory_only: bool
    anchored: bool
    steps: tuple[Step, ...]
    source_index: int

    def matches(self, segments: tuple[str, ...]) -> bool:
        """
        Check whether the steps of this rule consume exactly `segments`.

        Keeps the set of path positions reachable after each step, so a
        query costs at most steps × segments.

        Args:
            segments (tuple[str, ...]): The path, one component per item.

        Returns:
            bool: True if some alignment consumes the whole path.
        """
        positions = {0}
        for step in self.steps:
            if step.kind == "any":
                positions = set(range(min(positions), len(segments) + 1))
            else:
                positions = {
                    i + 1
                    for i in positions
                    if i < len(segments) and step.matcher.matches(segments[i])
                }
            if not positions:
                return False
        return len(segments) in positions


def compile_pattern(pattern: Pattern, source_index: int) -> CompiledRule:
    """
    Turn a parsed pattern into a rule of segment steps.

    An unanchored pattern with a single ordinary segment matches the last
    component of a path at any depth. Every other pattern is aligned with
    the first path component. A `**` segment spans zero or more
    components, except in last position where it spans one or more, so
    `dir/**` covers what is below `dir` but not `dir` itself.

    Args:
        pattern (Pattern): The parsed pattern.
        source_index (int): Declaration order among the compiled rules.

    Returns:
        CompiledRule: The compiled rule.
    """
    segments = pattern.segments
    steps: list[Step] = []

    if not pattern.anchored and len(segments) == 1 and not is_double_star(segments[0]):
        steps = [ANY_SEGMENTS, _exact(compile_segment(segments[0]))]
    else:
        last = len(segments) - 1
        for position, segment in enumerate(segments):
            if not is_double_star(segment):
                steps.append(_exact(compile_segment(segment)))
            elif position == last:
                steps.extend([_exact(MATCH_ANY_SEGMENT), ANY_SEGMENTS])
            else:
                steps.append(ANY_SEGMENTS)

    return CompiledRule(
        text=pattern.text,
        line_number=pattern.line_number,
        negated=pattern.negated,
        directory_only=pattern.directory_only,
        anchored=pattern.anchored,
        steps=tuple(steps),
        source_index=source_index,
    )
