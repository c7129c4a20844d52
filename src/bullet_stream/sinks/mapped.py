# topmark:header:start
#
#   project      : bullet-stream
#   file         : mapped.py
#   file_relpath : src/bullet_stream/sinks/mapped.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Record-buffering sink that transforms each record before forwarding it.

[`MappedWrite`][bullet_stream.sinks.mapped.MappedWrite] buffers written bytes
until a marker byte is seen, passes the complete record (marker included)
through a mapping function and writes the result to the wrapped sink.

A trailing record without a marker is not lost: it is mapped and forwarded
exactly once when the writer is released with `unwrap()`, `close()`, on
leaving a ``with`` block, or when the object is garbage collected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from bullet_stream.constants import CMD_INDENT, NEWLINE

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from bullet_stream.sinks.api import ByteSink

W = TypeVar("W", bound="ByteSink")


class MappedWrite(Generic[W]):
    """A mapped writer created with [`mapped`][bullet_stream.sinks.mapped.mapped]
    or [`line_mapped`][bullet_stream.sinks.mapped.line_mapped].

    Instances are not thread-safe; share one across threads only behind an
    external lock.
    """

    def __init__(self, inner: W, marker_byte: int, mapping_fn: Callable[[bytes], bytes]) -> None:
        self._inner: W | None = inner
        self._marker_byte = marker_byte
        self._buffer = bytearray()
        self._mapping_fn = mapping_fn

    @property
    def inner(self) -> W:
        """The wrapped sink (only valid until released)."""
        if self._inner is None:
            raise ValueError("MappedWrite was already released")
        return self._inner

    @property
    def released(self) -> bool:
        """True once the inner sink has been handed back."""
        return self._inner is None

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Buffer ``data``, forwarding every completed record through the mapping."""
        inner = self.inner
        start = 0
        view = bytes(data)
        while True:
            index = view.find(self._marker_byte, start)
            if index == -1:
                self._buffer += view[start:]
                break
            self._buffer += view[start : index + 1]
            inner.write(self._mapping_fn(bytes(self._buffer)))
            self._buffer.clear()
            start = index + 1
        return len(view)

    def flush(self) -> None:
        """Flush the wrapped sink; an incomplete record stays buffered."""
        if self._inner is not None:
            self._inner.flush()

    def unwrap(self) -> W:
        """Forward any buffered remainder and hand back the wrapped sink."""
        inner = self.inner
        self._release()
        return inner

    def close(self) -> None:
        """Forward any buffered remainder and release the wrapped sink.

        Closing an already released writer is a no-op.
        """
        if self._inner is not None:
            self._release()

    def _release(self) -> None:
        inner = self._inner
        assert inner is not None
        remainder = bytes(self._buffer)
        self._buffer.clear()
        self._inner = None
        if remainder:
            inner.write(self._mapping_fn(remainder))

    def __enter__(self) -> MappedWrite[W]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        # Unreleased writers still forward their remainder on collection.
        if getattr(self, "_inner", None) is not None:
            self.close()

    def __repr__(self) -> str:
        return (
            f"MappedWrite(inner={self._inner!r}, marker_byte={self._marker_byte!r}, "
            f"buffer={bytes(self._buffer)!r})"
        )


def mapped(inner: W, marker_byte: int, mapping_fn: Callable[[bytes], bytes]) -> MappedWrite[W]:
    """Buffer until ``marker_byte`` is encountered, then map and forward.

    Args:
        inner (W): Destination sink.
        marker_byte (int): Byte value that terminates a record.
        mapping_fn (Callable[[bytes], bytes]): Pure transform applied to each record.

    Returns:
        MappedWrite[W]: The mapping writer.
    """
    return MappedWrite(inner, marker_byte, mapping_fn)


def line_mapped(inner: W, mapping_fn: Callable[[bytes], bytes]) -> MappedWrite[W]:
    """Like [`mapped`][bullet_stream.sinks.mapped.mapped] with a newline marker."""
    return mapped(inner, NEWLINE[0], mapping_fn)


def indent_line(line: bytes) -> bytes:
    """Prefix ``line`` with the command indentation unless it is blank.

    Blank lines are returned as-is so no trailing whitespace is introduced.
    """
    if not line or line == NEWLINE:
        return line
    return CMD_INDENT.encode() + line


def format_stream_writer(inner: W) -> MappedWrite[W]:
    """Return a line-mapped writer indenting streamed command output."""
    return line_mapped(inner, indent_line)
