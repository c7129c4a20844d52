# topmark:header:start
#
#   project      : bullet-stream
#   file         : style.py
#   file_relpath : src/bullet_stream/style.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for formatting and colorizing values embedded in output text.

All helpers return plain `str` values that can be passed to any
[`Print`][bullet_stream.Print] operation; nested colors are preserved by the
per-line wrapping done on output.
"""

from __future__ import annotations

from bullet_stream.ansi import ANSI, wrap_ansi_escape_each_line


def url(contents: str) -> str:
    """Decorate a URL."""
    return wrap_ansi_escape_each_line(ANSI.BOLD_UNDERLINE_CYAN, contents)


def command(contents: str) -> str:
    """Decorate the name of a command being run, e.g. ``bundle install``."""
    return value(wrap_ansi_escape_each_line(ANSI.BOLD_CYAN, contents))


def value(contents: str) -> str:
    """Decorate an important value, e.g. ``2.3.4``, wrapped in backticks."""
    return f"`{wrap_ansi_escape_each_line(ANSI.YELLOW, contents)}`"


def details(contents: str) -> str:
    """Decorate additional information at the end of a line."""
    return f"({contents})"


def important(contents: str) -> str:
    """Decorate important information, e.g. a ``HELP:`` prefix."""
    return wrap_ansi_escape_each_line(ANSI.BOLD_CYAN, contents)


def running_command(name: str) -> str:
    """Return the label announcing that command ``name`` is running."""
    return f"Running {command(name)}"
