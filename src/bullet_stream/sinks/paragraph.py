# topmark:header:start
#
#   project      : bullet-stream
#   file         : paragraph.py
#   file_relpath : src/bullet_stream/sinks/paragraph.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Trailing-newline aware sink.

When several paragraphs are emitted, each wants a blank line before and after
itself. Writing both blindly doubles the blank lines; this wrapper remembers
how the output so far ends so emitters can skip the redundant newline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from bullet_stream.constants import NEWLINE

if TYPE_CHECKING:
    from bullet_stream.sinks.api import ByteSink

W = TypeVar("W", bound="ByteSink")


def _trailing_newlines(data: bytes) -> int:
    return len(data) - len(data.rstrip(NEWLINE))


class ParagraphInspectWrite(Generic[W]):
    """Wrap ``inner`` and track trailing newlines across fragmented writes.

    The tracked state is insensitive to how the output is chunked: replaying
    any split of a byte string yields the same state as writing it whole.

    Attributes:
        inner (W): The wrapped sink.
        was_paragraph (bool): True if the output currently ends with a blank line.
        newlines_since_last_char (int): Length of the trailing newline run.
    """

    def __init__(
        self,
        inner: W,
        *,
        was_paragraph: bool = False,
        newlines_since_last_char: int = 0,
    ) -> None:
        self.inner = inner
        self.was_paragraph = was_paragraph
        self.newlines_since_last_char = newlines_since_last_char

    def write(self, data: bytes) -> int:
        """Forward ``data`` to the inner sink, updating the paragraph state first."""
        data = bytes(data)
        trailing = _trailing_newlines(data)
        if trailing == len(data):
            self.newlines_since_last_char += trailing
        else:
            self.newlines_since_last_char = trailing
        self.was_paragraph = self.newlines_since_last_char > 1

        self.inner.write(data)
        return len(data)

    def flush(self) -> None:
        """Flush the inner sink."""
        self.inner.flush()

    def trailing_paragraph(self) -> bool:
        """Return True if the last thing written ended with two or more newlines."""
        return self.was_paragraph

    def trailing_newline_count(self) -> int:
        """Return the current trailing newline run length."""
        return self.newlines_since_last_char

    def __repr__(self) -> str:
        return (
            f"ParagraphInspectWrite(inner={self.inner!r}, was_paragraph={self.was_paragraph}, "
            f"newlines_since_last_char={self.newlines_since_last_char})"
        )
