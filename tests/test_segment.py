"""Tests for the one-segment glob matcher."""

import pytest

from ignoretree.parser import parse_line
from ignoretree.segment import MATCH_ANY_SEGMENT, compile_segment
from ignoretree.tokens import DoubleStarToken, StarToken


def _matcher(glob):
    return compile_segment(parse_line(glob, 1).segments[0])


@pytest.mark.parametrize(
    "glob, name, expected",
    [
        ("foo.txt", "foo.txt", True),
        ("foo.txt", "foo.txt.bak", False),
        ("foo.txt", "xfoo.txt", False),
        ("*.txt", "notes.txt", True),
        ("*.txt", ".txt", True),
        ("*.txt", "notes.txt.bak", False),
        ("a*b*c", "aXbYc", True),
        ("a*b*c", "abc", True),
        ("a*b*c", "aXbY", False),
        ("*a", "baa", True),
        ("*ab", "aab", True),
        ("a*", "a", True),
        ("a?c", "abc", True),
        ("a?c", "ac", False),
        ("a?c", "abbc", False),
        ("[abc]x", "bx", True),
        ("[abc]x", "dx", False),
        ("[!abc]x", "dx", True),
        ("[!abc]x", "ax", False),
        ("[a-f]1", "c1", True),
        ("[a-f]1", "g1", False),
        ("\\*", "*", True),
        ("\\*", "a", False),
        ("*", "anything", True),
    ],
)
def test_segment_matching(glob, name, expected):
    assert _matcher(glob).matches(name) is expected


def test_literal_is_flattened_into_characters():
    matcher = _matcher("ab*")
    assert len(matcher.units) == 3


def test_match_any_segment():
    assert MATCH_ANY_SEGMENT.matches("x")
    assert MATCH_ANY_SEGMENT.matches("a.b.c")


def test_double_star_has_no_segment_matcher():
    with pytest.raises(ValueError):
        compile_segment((DoubleStarToken(),))


@pytest.mark.parametrize("token", [StarToken(), DoubleStarToken()])
def test_multi_character_wildcards_accept_no_single_character(token):
    assert token.accepts("a") is False
