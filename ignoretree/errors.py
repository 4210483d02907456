from pathlib import Path


class IgnorePatternError(ValueError):
    """
    Raised when a line of an ignore file cannot be compiled into a rule.

    Args:
        line_number (int): 1-based line number of the offending pattern.
        reason (str): Human readable description of the problem.
        pattern (str): The raw pattern text.
    """

    def __init__(self, line_number: int, reason: str, pattern: str = ""):
        self.line_number = line_number
        self.reason = reason
        self.pattern = pattern
        super().__init__(f"line {line_number}: {reason}: {pattern!r}")


class MalformedPatternError(IgnorePatternError):
    """A character class was opened with `[` but never closed."""


class InvalidWildcardError(IgnorePatternError):
    """A run of asterisks that is not a whole `**` segment."""


class IgnoreFileNotFoundError(FileNotFoundError):
    def __init__(self, directory: Path, filename: str):
        self.directory = directory
        self.filename = filename
        super().__init__(f"{filename} file not found in directory {directory}")
