# topmark:header:start
#
#   project      : bullet-stream
#   file         : test_text.py
#   file_relpath : tests/test_text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-prefix helpers used by bullets and announcements."""

from __future__ import annotations

from bullet_stream.text import prefix_first_rest_lines, prefix_lines, split_inclusive
from tests.conftest import parametrize


@parametrize(
    "contents, expected",
    [
        ("hello", "- hello"),
        ("hello\nworld", "- hello\n  world"),
        ("hello\nworld\n", "- hello\n  world\n"),
        ("", "- "),
        ("hello\n\nworld", "- hello\n  \n  world"),
    ],
)
def test_prefix_first_rest_lines(contents: str, expected: str) -> None:
    assert prefix_first_rest_lines("- ", "  ", contents) == expected


def test_prefix_lines_constant_prefix() -> None:
    assert prefix_lines("hello\nworld\n", lambda _i, _l: "- ") == "- hello\n- world\n"


def test_prefix_lines_receives_line_index() -> None:
    assert prefix_lines("hello\nworld\n", lambda i, _l: f"{i}: ") == "0: hello\n1: world\n"


@parametrize(
    "contents, expected",
    [
        ("", "- "),
        ("\n", "- \n"),
        ("\n\n", "- \n- \n"),
    ],
)
def test_prefix_lines_edge_cases(contents: str, expected: str) -> None:
    assert prefix_lines(contents, lambda _i, _l: "- ") == expected


def test_prefix_lines_passes_line_with_terminator() -> None:
    seen: list[str] = []

    def record(_index: int, line: str) -> str:
        seen.append(line)
        return ""

    prefix_lines("a\n\nb", record)
    assert seen == ["a\n", "\n", "b"]


def test_split_inclusive_only_splits_on_newline() -> None:
    assert split_inclusive("a\rb\x0bc\nd") == ["a\rb\x0bc\n", "d"]
    assert split_inclusive("a\n") == ["a\n"]
