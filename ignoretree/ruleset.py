"""Compiled rule sets and the ignore verdict."""

import logging
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ignoretree.compiler import CompiledRule, compile_pattern
from ignoretree.parser import parse_lines

logger = logging.getLogger(__name__)


class MatchContext(BaseModel):
    """
    A single query against a RuleSet.

    Attributes:
        segments (tuple[str, ...]): The path relative to the ignore root,
            one clean component per item.
        is_directory (bool): The path names a directory.
        ancestor_excluded (bool): A parent directory of the path was already
            excluded by a non-negated directory rule.
    """

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...]
    is_directory: bool = False
    ancestor_excluded: bool = False


class RuleSet(BaseModel):
    """
    Ordered, immutable collection of compiled rules from one pattern list.

    Rules keep their declaration order; the last rule matching a path
    decides the verdict. A RuleSet holds no per-query state and can be
    shared between threads.

    Example:
        >>> rules = RuleSet.from_lines(["*.log", "!important.log"])
        >>> rules.evaluate(["logs", "debug.log"])
        True
        >>> rules.evaluate(["important.log"])
        False
    """

    model_config = ConfigDict(frozen=True)

    rules: tuple[CompiledRule, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RuleSet":
        """
        Compile the lines of one ignore file.

        Args:
            lines (Iterable[str]): Raw lines in file order.

        Returns:
            RuleSet: The compiled rules.

        Raises:
            IgnorePatternError: If any line is malformed. No rule set is
                built in that case.
        """
        rules = tuple(
            compile_pattern(pattern, source_index)
            for source_index, pattern in enumerate(parse_lines(lines))
        )
        logger.debug("Compiled %d ignore rules", len(rules))
        return cls(rules=rules)

    def __len__(self) -> int:
        return len(self.rules)

    def last_match(self, context: MatchContext) -> Optional[CompiledRule]:
        """
        Find the rule that decides the verdict for a query.

        Directory-only rules are tried only against directories.

        Returns:
            Optional[CompiledRule]: The matching rule declared last, or None.
        """
        for rule in reversed(self.rules):
            if rule.directory_only and not context.is_directory:
                continue
            if rule.matches(context.segments):
                return rule
        return None

    def check(self, context: MatchContext) -> bool:
        # Nothing inside an excluded directory can be re-included
        if context.ancestor_excluded:
            return True
        rule = self.last_match(context)
        return rule is not None and not rule.negated

    def evaluate(
        self,
        path: Sequence[str],
        is_directory: bool = False,
        ancestor_excluded: bool = False,
    ) -> bool:
        """
        Decide whether a path is ignored.

        Args:
            path (Sequence[str]): Path components relative to the ignore root.
            is_directory (bool): The path names a directory.
            ancestor_excluded (bool): A parent directory was already excluded;
                the path is then ignored without consulting any rule.

        Returns:
            bool: True if the path is ignored.
        """
        return self.check(
            MatchContext(
                segments=tuple(path),
                is_directory=is_directory,
                ancestor_excluded=ancestor_excluded,
            )
        )


def compile_lines(lines: Iterable[str]) -> RuleSet:
    return RuleSet.from_lines(lines)
