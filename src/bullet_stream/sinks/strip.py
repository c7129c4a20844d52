# topmark:header:start
#
#   project      : bullet-stream
#   file         : strip.py
#   file_relpath : src/bullet_stream/sinks/strip.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pass-through sink that removes color codes before they reach the destination."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from bullet_stream.ansi import strip_ansi

if TYPE_CHECKING:
    from bullet_stream.sinks.api import ByteSink

W = TypeVar("W", bound="ByteSink")


class AnsiStripWrite(Generic[W]):
    """Forward every write to ``inner`` with color sequences removed.

    Each chunk is stripped on its own. The emitters always write whole escape
    sequences, so a sequence is never split across two writes.
    """

    def __init__(self, inner: W) -> None:
        self.inner = inner

    def write(self, data: bytes) -> int:
        """Strip ``data`` and forward it; returns the length of the original chunk."""
        text = bytes(data).decode("utf-8", "surrogateescape")
        self.inner.write(strip_ansi(text).encode("utf-8", "surrogateescape"))
        return len(data)

    def flush(self) -> None:
        """Flush the inner sink."""
        self.inner.flush()
