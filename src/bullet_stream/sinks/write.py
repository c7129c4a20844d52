# topmark:header:start
#
#   project      : bullet-stream
#   file         : write.py
#   file_relpath : src/bullet_stream/sinks/write.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Write-and-flush helpers shared by every emitter.

Output is never left buffered: each helper flushes after writing. A sink that
rejects a write or flush (closed file, broken pipe) raises
[`SinkClosedError`][bullet_stream.errors.SinkClosedError].
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bullet_stream.errors import SinkClosedError

if TYPE_CHECKING:
    from bullet_stream.sinks.api import ByteSink


def write_now(sink: ByteSink, text: str) -> None:
    """Write ``text`` (UTF-8) to ``sink`` and flush it."""
    try:
        sink.write(text.encode("utf-8"))
        sink.flush()
    except (OSError, ValueError) as exc:
        raise SinkClosedError(f"Output error: UI writer closed ({exc})") from exc


def writeln_now(sink: ByteSink, text: str = "") -> None:
    """Write ``text`` followed by a newline to ``sink`` and flush it."""
    write_now(sink, f"{text}\n")
