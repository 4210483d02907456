import logging
from pathlib import Path

from ignoretree.errors import IgnoreFileNotFoundError
from ignoretree.ruleset import RuleSet

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILENAME = ".gitignore"


def find_ignore_file(directory: Path, filename: str = DEFAULT_IGNORE_FILENAME) -> Path:
    """
    Locate the ignore file of a directory.

    Args:
        directory (Path): Directory expected to hold the ignore file.
        filename (str): Name of the ignore file.

    Returns:
        Path: Path to the ignore file.

    Raises:
        IgnoreFileNotFoundError: If the directory has no such file.
    """
    ignore_path = directory / filename
    if not ignore_path.is_file():
        raise IgnoreFileNotFoundError(directory, filename)
    return ignore_path


def read_ignore_lines(ignore_path: Path) -> list[str]:
    """
    Read an ignore file and return its raw lines, comments included.

    Args:
        ignore_path (Path): Path to the ignore file.

    Returns:
        list[str]: The lines without their terminators.
    """
    with ignore_path.open("r", encoding="utf-8") as file:
        return file.read().splitlines()


def load_ruleset(
    directory: Path,
    filename: str = DEFAULT_IGNORE_FILENAME,
    missing_ok: bool = False,
) -> RuleSet:
    """
    Compile the ignore file found in a directory.

    Args:
        directory (Path): Root the patterns are relative to.
        filename (str): Name of the ignore file.
        missing_ok (bool): Return an empty RuleSet instead of raising when
            the file does not exist.

    Returns:
        RuleSet: The compiled rules.
    """
    try:
        ignore_path = find_ignore_file(directory, filename)
    except IgnoreFileNotFoundError:
        if not missing_ok:
            raise
        logger.debug("No %s in %s, nothing is ignored", filename, directory)
        return RuleSet()

    ruleset = RuleSet.from_lines(read_ignore_lines(ignore_path))
    logger.info("Loaded %d rules from %s", len(ruleset), ignore_path)
    return ruleset
