# topmark:header:start
#
#   project      : bullet-stream
#   file         : text.py
#   file_relpath : src/bullet_stream/text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-prefix helpers used to lay out bullets and announcements."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def prefix_lines(contents: str, prefix_for: Callable[[int, str], str]) -> str:
    """Prefix each line of ``contents``.

    Every line (including its trailing newline, if any) is passed to
    ``prefix_for`` together with its index; the returned string is prepended.

    An empty ``contents`` still receives the prefix of line 0, so a nested
    bullet always follows its parent even when the caller passed no text.

    Args:
        contents (str): Text to prefix.
        prefix_for (Callable[[int, str], str]): Maps ``(line_index, line)`` to a prefix.

    Returns:
        str: The prefixed text.
    """
    if not contents:
        return prefix_for(0, "")
    return "".join(
        prefix_for(index, line) + line for index, line in enumerate(split_inclusive(contents))
    )


def split_inclusive(contents: str) -> list[str]:
    """Split ``contents`` after every ``\\n``, keeping the terminators.

    Unlike `str.splitlines`, only ``\\n`` is a line boundary; a trailing
    newline does not produce an extra empty line.
    """
    parts = contents.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def prefix_first_rest_lines(first_prefix: str, rest_prefix: str, contents: str) -> str:
    """Apply ``first_prefix`` to the first line and ``rest_prefix`` to the others.

    Examples:
        >>> prefix_first_rest_lines("- ", "  ", "hello\\nworld")
        '- hello\\n  world'
    """
    return prefix_lines(contents, lambda index, _line: first_prefix if index == 0 else rest_prefix)
