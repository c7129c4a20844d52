# topmark:header:start
#
#   project      : bullet-stream
#   file         : api.py
#   file_relpath : src/bullet_stream/sinks/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Structural interfaces for the byte sinks used by bullet-stream.

Any object with ``write(bytes)`` and ``flush()`` is accepted as a sink: an
`io.BytesIO`, a file opened in binary mode, ``sys.stderr.buffer``, or one of
the wrappers in [`bullet_stream.sinks`][bullet_stream.sinks].
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Minimal binary writer interface."""

    def write(self, data: bytes, /) -> object:
        """Write ``data``; the return value is ignored."""
        ...

    def flush(self) -> None:
        """Flush any buffered bytes to the destination."""
        ...


@runtime_checkable
class TrailingParagraphSink(ByteSink, Protocol):
    """A sink that knows how the bytes written so far end.

    A paragraph style block of text has a blank line before and after it.
    Emitters consult this interface to avoid doubling those blank lines.
    """

    def trailing_paragraph(self) -> bool:
        """Return True if the last bytes written were two or more newlines."""
        ...

    def trailing_newline_count(self) -> int:
        """Return the number of consecutive newlines at the end of the output."""
        ...
