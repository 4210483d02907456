import logging
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict

from ignoretree.errors import InvalidWildcardError, MalformedPatternError
from ignoretree.tokens import (
    AnyCharToken,
    CharClassToken,
    DoubleStarToken,
    LiteralToken,
    Segment,
    SegmentToken,
    StarToken,
)

logger = logging.getLogger(__name__)


class Pattern(BaseModel):
    """
    One parsed line of an ignore file.

    Attributes:
        text (str): The line as written, without its line terminator.
        line_number (int): 1-based position of the line in its source.
        negated (bool): The line started with `!`.
        directory_only (bool): The line ended with `/`.
        anchored (bool): The line started with `/`.
        segments (tuple[Segment, ...]): One token tuple per path component.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    line_number: int
    negated: bool = False
    directory_only: bool = False
    anchored: bool = False
    segments: tuple[Segment, ...]


def _is_escaped(text: str, index: int) -> bool:
    backslashes = 0
    while index - backslashes - 1 >= 0 and text[index - backslashes - 1] == "\\":
        backslashes += 1
    return backslashes % 2 == 1


def _trim_trailing_whitespace(text: str) -> str:
    end = len(text)
    while end > 0 and text[end - 1] in " \t":
        if _is_escaped(text, end - 1):
            break
        end -= 1
    return text[:end]


def _split_unescaped(body: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            current.append(body[i : i + 2])
            i += 2
            continue
        if char == "/":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    parts.append("".join(current))
    return parts


def _parse_char_class(
    raw: str, start: int, line_number: int, text: str
) -> tuple[CharClassToken, int]:
    """
    Parse a bracket expression starting at `raw[start] == "["`.

    Returns:
        tuple[CharClassToken, int]: The token and the index just past `]`.

    Raises:
        MalformedPatternError: If the closing `]` is missing.
    """
    i = start + 1
    negated = False
    if i < len(raw) and raw[i] in "!^":
        negated = True
        i += 1

    # (character, was_escaped)
    members: list[tuple[str, bool]] = []
    while True:
        if i >= len(raw):
            raise MalformedPatternError(
                line_number, "unterminated character class", text
            )
        char = raw[i]
        if char == "]" and members:
            break
        if char == "\\" and i + 1 < len(raw):
            members.append((raw[i + 1], True))
            i += 2
        else:
            members.append((char, False))
            i += 1

    chars: set[str] = set()
    ranges: list[tuple[str, str]] = []
    j = 0
    while j < len(members):
        if j + 2 < len(members) and members[j + 1] == ("-", False):
            ranges.append((members[j][0], members[j + 2][0]))
            j += 3
        else:
            chars.add(members[j][0])
            j += 1

    token = CharClassToken(chars=frozenset(chars), ranges=tuple(ranges), negated=negated)
    return token, i + 1


def _tokenize_segment(raw: str, line_number: int, text: str) -> Segment:
    if raw == "**":
        return (DoubleStarToken(),)

    tokens: list[SegmentToken] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            tokens.append(LiteralToken(text="".join(literal)))
            literal.clear()

    i = 0
    while i < len(raw):
        char = raw[i]
        if char == "\\":
            # A lone trailing backslash stands for itself
            literal.append(raw[i + 1] if i + 1 < len(raw) else "\\")
            i += 2
        elif char == "*":
            if raw[i + 1 : i + 2] == "*":
                raise InvalidWildcardError(
                    line_number,
                    "consecutive asterisks are only allowed as a whole '**' segment",
                    text,
                )
            flush()
            tokens.append(StarToken())
            i += 1
        elif char == "?":
            flush()
            tokens.append(AnyCharToken())
            i += 1
        elif char == "[":
            flush()
            token, i = _parse_char_class(raw, i, line_number, text)
            tokens.append(token)
        else:
            literal.append(char)
            i += 1
    flush()
    return tuple(tokens)


def parse_line(line: str, line_number: int) -> Optional[Pattern]:
    """
    Parse a single ignore-file line.

    Args:
        line (str): The raw line, with or without its line terminator.
        line_number (int): 1-based line number, reported in errors.

    Returns:
        Optional[Pattern]: The parsed pattern, or None for blank lines,
            comments and lines that reduce to nothing (e.g. `/` or `!`).

    Raises:
        MalformedPatternError: On an unterminated character class.
        InvalidWildcardError: On asterisk runs other than a whole `**` segment.
    """
    text = line.rstrip("\r\n")
    body = _trim_trailing_whitespace(text)
    if not body or body.startswith("#"):
        return None

    negated = body.startswith("!")
    if negated:
        body = body[1:]

    directory_only = body.endswith("/") and not _is_escaped(body, len(body) - 1)
    if directory_only:
        body = body[:-1]

    anchored = body.startswith("/")
    if anchored:
        body = body[1:]

    raw_segments = [raw for raw in _split_unescaped(body) if raw]
    if not raw_segments:
        logger.debug("Line %d (%r) has no path segments, skipping", line_number, text)
        return None

    segments = tuple(_tokenize_segment(raw, line_number, text) for raw in raw_segments)
    return Pattern(
        text=text,
        line_number=line_number,
        negated=negated,
        directory_only=directory_only,
        anchored=anchored,
        segments=segments,
    )


def parse_lines(lines: Iterable[str]) -> Iterator[Pattern]:
    """Parse every line in order, skipping the ones that produce no pattern."""
    for line_number, line in enumerate(lines, start=1):
        pattern = parse_line(line, line_number)
        if pattern is not None:
            yield pattern
