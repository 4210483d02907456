from pathlib import Path
from typing import List

import typer

from ignoretree.log import init_logging
from ignoretree.loader import DEFAULT_IGNORE_FILENAME, load_ruleset
from ignoretree.ruleset import MatchContext, RuleSet
from ignoretree.walker import (
    IgnoreReport,
    WalkOptions,
    find_excluded_parent,
    generate_tree,
    is_real_dir,
    split_path,
    traverse_directory_dfs,
)

app = typer.Typer(
    name="ignoretree",
    help="Check paths against gitignore-style patterns and list what is kept.",
)

IGNORE_FILE_OPTION = typer.Option(
    DEFAULT_IGNORE_FILENAME,
    "--ignore-file",
    "-f",
    help="Name of the ignore file in the root directory.",
)
LOG_LEVEL_OPTION = typer.Option(
    "WARNING",
    "--log-level",
    "-l",
    help="Logging level (DEBUG, INFO, WARNING, ERROR).",
)


def _load(root: Path, ignore_file: str, log_level: str) -> RuleSet:
    init_logging(log_level)
    try:
        return load_ruleset(root, ignore_file)
    except (ValueError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def check(
    paths: List[str] = typer.Argument(..., help="Paths relative to the root directory."),
    root: Path = typer.Option(
        Path("."), "--root", "-r", help="Directory holding the ignore file."
    ),
    directory: bool = typer.Option(
        False,
        "--directory",
        "-d",
        help="Treat every path as a directory, even if it does not exist.",
    ),
    explain: bool = typer.Option(
        False, "--explain", "-e", help="Show the rule that decided each verdict."
    ),
    ignore_file: str = IGNORE_FILE_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """
    Print whether each path is ignored.
    """
    ruleset = _load(root, ignore_file, log_level)
    for raw_path in paths:
        try:
            segments = split_path(raw_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

        is_dir = directory or is_real_dir(root / raw_path)
        parent = find_excluded_parent(ruleset, segments)
        ignored = ruleset.evaluate(
            segments, is_directory=is_dir, ancestor_excluded=parent is not None
        )
        line = f"{'ignored' if ignored else 'kept':<8}{raw_path}"

        if explain:
            if parent is not None:
                line += f"  (inside ignored directory {'/'.join(parent)})"
            else:
                context = MatchContext(segments=segments, is_directory=is_dir)
                rule = ruleset.last_match(context)
                if rule is not None:
                    line += f"  ({ignore_file}:{rule.line_number}: {rule.text})"
        typer.echo(line)


@app.command("ls")
def list_paths(
    root: Path = typer.Argument(..., help="Path to the root directory."),
    ignored: bool = typer.Option(
        False, "--ignored", "-i", help="List ignored paths instead of kept ones."
    ),
    summary: bool = typer.Option(
        False, "--summary", "-s", help="Print how many entries were ignored."
    ),
    descend_ignored: bool = typer.Option(
        False,
        "--descend-ignored",
        help="Also list the contents of ignored directories.",
    ),
    ignore_file: str = IGNORE_FILE_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """
    List the paths under a directory that are kept (or ignored).
    """
    ruleset = _load(root, ignore_file, log_level)
    options = WalkOptions(descend_ignored=descend_ignored)
    report = IgnoreReport()
    try:
        for entry in traverse_directory_dfs(root, ruleset, options):
            report.record(entry)
            if entry.ignored == ignored:
                suffix = "/" if entry.is_dir else ""
                typer.echo("/".join(entry.relative) + suffix)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if summary:
        typer.echo(f"{len(report.ignored)} of {report.total} entries ignored")


@app.command()
def tree(
    root: Path = typer.Argument(..., help="Path to the root directory."),
    include_hidden: bool = typer.Option(
        True, "--hidden/--no-hidden", help="Show entries whose name starts with a dot."
    ),
    ignore_file: str = IGNORE_FILE_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """
    Generate a directory tree of the paths that are not ignored.
    """
    ruleset = _load(root, ignore_file, log_level)
    options = WalkOptions(include_hidden=include_hidden)
    try:
        typer.echo(generate_tree(root, ruleset, options))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
