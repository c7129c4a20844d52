# topmark:header:start
#
#   project      : bullet-stream
#   file         : ansi.py
#   file_relpath : src/bullet_stream/ansi.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ANSI color wrapping that survives nesting, and its paired stripper.

Why per-line wrapping:
    Build output is frequently relayed line by line by another program (for
    example `git push` prefixes every remote line with ``remote: ``). A color
    that spans a newline would bleed into that prefix, so every line is opened
    and closed on its own.

Nested colors:
    Text that is already colored keeps its colors. After each inner reset the
    outer color is re-asserted so the remainder of the line is colored
    correctly. Redundant sequences produced by that process are collapsed.

[`strip_ansi`][bullet_stream.ansi.strip_ansi] is a best-effort inverse for text
produced by [`wrap_ansi_escape_each_line`][bullet_stream.ansi.wrap_ansi_escape_each_line];
it is not a general ANSI parser.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

RESET: Final[str] = "\x1b[0m"
_SGR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


class ANSI(str, Enum):
    """Escape sequences, one per semantic role in the output."""

    DIM = "\x1b[2;1m"
    RED = "\x1b[0;31m"
    YELLOW = "\x1b[0;33m"
    BOLD_CYAN = "\x1b[1;36m"
    BOLD_PURPLE = "\x1b[1;35m"
    BOLD_UNDERLINE_CYAN = "\x1b[1;4;36m"


def wrap_ansi_escape_each_line(ansi: ANSI, body: str) -> str:
    """Wrap each line of ``body`` in ``ansi`` while preserving nested colors.

    Args:
        ansi (ANSI): Color to apply.
        body (str): Text to colorize; may contain newlines and colored fragments.

    Returns:
        str: The colorized text. Blank lines are returned without any escape code.
    """
    code = ansi.value
    lines: list[str] = []
    for line in body.split("\n"):
        line = line.replace(RESET, f"{RESET}{code}")
        line = f"{code}{line}{RESET}"
        line = line.replace(f"{code}{code}", code)
        line = line.replace(f"{code}{RESET}", "")
        lines.append(line)
    return "\n".join(lines)


def strip_ansi(contents: str) -> str:
    """Remove SGR color sequences (``ESC [ <digits;> m``) from ``contents``.

    Other escape sequences, such as the line-erase codes written by progress
    bars in streamed command output, pass through unchanged.

    Args:
        contents (str): Possibly colorized text.

    Returns:
        str: The text with color sequences removed.
    """
    return _SGR_PATTERN.sub("", contents)
