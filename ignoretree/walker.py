import logging
from collections import deque
from pathlib import Path, PurePath
from typing import Iterator, Optional, Union

from pydantic import BaseModel, Field

from ignoretree.ruleset import RuleSet

logger = logging.getLogger(__name__)


class WalkOptions(BaseModel):
    include_hidden: bool = True
    # Never yielded nor descended into
    skip_names: tuple[str, ...] = (".git",)
    # Also walk ignored directories, reporting everything below them as ignored
    descend_ignored: bool = False


class DirectoryEntry(BaseModel):
    path: Path
    relative: tuple[str, ...]
    depth: int
    is_dir: bool
    ignored: bool


class IgnoreReport(BaseModel):
    """Paths ignored during a walk, plus the number of entries visited."""

    ignored: list[str] = Field(default_factory=list)
    total: int = 0

    def record(self, entry: DirectoryEntry) -> None:
        self.total += 1
        if entry.ignored:
            self.ignored.append("/".join(entry.relative))


def split_path(path: Union[str, PurePath]) -> tuple[str, ...]:
    """
    Turn a relative path into clean path segments.

    Empty and `.` components are dropped.

    Args:
        path (Union[str, PurePath]): A path relative to the ignore root,
            using `/` as separator.

    Returns:
        tuple[str, ...]: The path components.

    Raises:
        ValueError: If the path climbs above the root with `..`.
    """
    text = path.as_posix() if isinstance(path, PurePath) else path
    segments = tuple(part for part in text.split("/") if part not in ("", "."))
    if ".." in segments:
        raise ValueError(f"Path {text!r} escapes the ignore root")
    return segments


def find_excluded_parent(
    ruleset: RuleSet, segments: tuple[str, ...]
) -> Optional[tuple[str, ...]]:
    """Return the topmost parent directory of `segments` that is ignored, if any."""
    for depth in range(1, len(segments)):
        if ruleset.evaluate(segments[:depth], is_directory=True):
            return segments[:depth]
    return None


def is_path_ignored(
    ruleset: RuleSet, path: Union[str, PurePath], is_directory: bool = False
) -> bool:
    """
    Decide whether a path is ignored, accounting for excluded parents.

    Each parent directory is checked first, from the top down; once one is
    excluded, the path is ignored whatever the remaining rules say.

    Args:
        ruleset (RuleSet): Compiled rules.
        path (Union[str, PurePath]): Path relative to the ignore root.
        is_directory (bool): The path names a directory.

    Returns:
        bool: True if the path is ignored.
    """
    segments = split_path(path)
    if find_excluded_parent(ruleset, segments) is not None:
        return True
    return ruleset.evaluate(segments, is_directory=is_directory)


def is_real_dir(path: Path) -> bool:
    # Links are entries of their own, never directories to descend into
    return path.is_dir() and not path.is_symlink()


def _is_skipped(path: Path, options: WalkOptions) -> bool:
    if path.name in options.skip_names:
        return True
    return not options.include_hidden and path.name.startswith(".")


def traverse_directory_dfs(
    directory: Path,
    ruleset: RuleSet,
    options: Optional[WalkOptions] = None,
) -> Iterator[DirectoryEntry]:
    """
    Traverse a directory in DFS order and yield every entry below it with
    its ignore verdict.

    Ignored directories are yielded but not entered, unless
    `options.descend_ignored` is set, in which case their contents are
    yielded as ignored without consulting the rules.

    Args:
        directory (Path): The root directory the rules are relative to.
        ruleset (RuleSet): Compiled rules.
        options (Optional[WalkOptions]): Walk settings.

    Yields:
        DirectoryEntry: One entry per file or directory, root excluded.
    """
    if not directory.is_dir():
        raise ValueError(f"The path {directory} is not a valid directory.")
    options = options or WalkOptions()

    def children(path: Path, relative: tuple[str, ...], depth: int, excluded: bool):
        entries = sorted(
            (entry for entry in path.iterdir() if not _is_skipped(entry, options)),
            key=lambda p: (not is_real_dir(p), p.name.lower()),
        )
        for entry in reversed(entries):
            yield entry, relative + (entry.name,), depth + 1, excluded

    stack = deque(children(directory, (), 0, False))  # LIFO: children are pushed in reverse
    while stack:
        current_path, relative, depth, ancestor_excluded = stack.pop()
        is_dir = is_real_dir(current_path)
        ignored = ruleset.evaluate(
            relative, is_directory=is_dir, ancestor_excluded=ancestor_excluded
        )

        yield DirectoryEntry(
            path=current_path, relative=relative, depth=depth, is_dir=is_dir, ignored=ignored
        )

        if not is_dir:
            continue
        if ignored and not options.descend_ignored:
            logger.debug("Pruning ignored directory %s", "/".join(relative))
            continue
        stack.extend(children(current_path, relative, depth, ignored))


def collect_report(
    directory: Path,
    ruleset: RuleSet,
    options: Optional[WalkOptions] = None,
) -> IgnoreReport:
    report = IgnoreReport()
    for entry in traverse_directory_dfs(directory, ruleset, options):
        report.record(entry)
    logger.info(
        "Visited %d entries under %s, %d ignored",
        report.total,
        directory,
        len(report.ignored),
    )
    return report


def generate_tree(
    directory: Path,
    ruleset: RuleSet,
    options: Optional[WalkOptions] = None,
) -> str:
    """
    Render the entries of a directory that are not ignored as a tree.

    Args:
        directory (Path): Path to the root directory.
        ruleset (RuleSet): Compiled rules.
        options (Optional[WalkOptions]): Walk settings.

    Returns:
        str: A string representing the directory tree structure.
    """
    tree_structure: list[str] = [directory.name]
    for entry in traverse_directory_dfs(directory, ruleset, options):
        if entry.ignored:
            continue

        # Build the tree prefix based on depth
        prefix = "    " * (entry.depth - 1)
        connector = "├── " if entry.is_dir else "└── "
        tree_structure.append(f"{prefix}{connector}{entry.path.name}")

    return "\n".join(tree_structure)
