"""Gitignore-style pattern compiler and ignore matcher."""

from ignoretree.errors import (
    IgnoreFileNotFoundError,
    IgnorePatternError,
    InvalidWildcardError,
    MalformedPatternError,
)
from ignoretree.loader import load_ruleset
from ignoretree.ruleset import MatchContext, RuleSet, compile_lines
from ignoretree.walker import is_path_ignored, split_path, traverse_directory_dfs

__all__ = [
    "IgnoreFileNotFoundError",
    "IgnorePatternError",
    "InvalidWildcardError",
    "MalformedPatternError",
    "MatchContext",
    "RuleSet",
    "compile_lines",
    "is_path_ignored",
    "load_ruleset",
    "split_path",
    "traverse_directory_dfs",
]
