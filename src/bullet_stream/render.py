# topmark:header:start
#
#   project      : bullet-stream
#   file         : render.py
#   file_relpath : src/bullet_stream/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Low-level emitters behind the [`Print`][bullet_stream.Print] state machine.

Each emitter writes one construct of the output format and flushes:

| Construct | Format |
|---|---|
| Header levels 1/2/3 | ``# ``, ``## ``, ``### `` + trimmed text, blank line before and after |
| Bullet | ``- `` first line, ``  `` continuation lines |
| Sub-bullet | ``  - `` first line, ``    `` continuation lines |
| Announcement | every line prefixed ``! `` (bare ``!`` when blank), blank line before and after |
| Streamed content | every non-blank line indented by six spaces |

Blank lines around headers and announcements are deduplicated through the
trailing-paragraph state of the sink.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, TypeVar

from bullet_stream import duration, style
from bullet_stream.ansi import ANSI, wrap_ansi_escape_each_line
from bullet_stream.background import print_interval
from bullet_stream.config.logging import get_logger
from bullet_stream.constants import (
    BULLET_FIRST_PREFIX,
    BULLET_REST_PREFIX,
    SUB_BULLET_FIRST_PREFIX,
    SUB_BULLET_REST_PREFIX,
    TIMER_TICK_INTERVAL,
)
from bullet_stream.errors import LeakedHandleError, SinkClosedError
from bullet_stream.multiplex import stream_to_output
from bullet_stream.sinks.mapped import format_stream_writer
from bullet_stream.sinks.write import write_now, writeln_now
from bullet_stream.text import prefix_first_rest_lines, prefix_lines

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from bullet_stream.background import PrintGuard
    from bullet_stream.config.logging import BulletStreamLogger
    from bullet_stream.multiplex import ChannelWriter
    from bullet_stream.sinks.api import ByteSink, TrailingParagraphSink
    from bullet_stream.sinks.mapped import MappedWrite

logger: BulletStreamLogger = get_logger(__name__)

T = TypeVar("T")
W = TypeVar("W", bound="ByteSink")

HEADER_COLOR = ANSI.BOLD_PURPLE
WARNING_COLOR = ANSI.YELLOW
ERROR_COLOR = ANSI.RED
IMPORTANT_COLOR = ANSI.BOLD_CYAN
TICK_COLOR = ANSI.DIM


def _header(writer: TrailingParagraphSink, marker: str, text: str) -> None:
    if not writer.trailing_paragraph():
        writeln_now(writer)
    writeln_now(writer, wrap_ansi_escape_each_line(HEADER_COLOR, f"{marker} {text.strip()}"))
    if not writer.trailing_paragraph():
        writeln_now(writer)


def h1(writer: TrailingParagraphSink, text: str) -> None:
    """Write a level 1 header surrounded by blank lines."""
    _header(writer, "#", text)


def h2(writer: TrailingParagraphSink, text: str) -> None:
    """Write a level 2 header surrounded by blank lines."""
    _header(writer, "##", text)


def h3(writer: TrailingParagraphSink, text: str) -> None:
    """Write a level 3 header surrounded by blank lines."""
    _header(writer, "###", text)


def bullet(writer: ByteSink, text: str) -> None:
    """Write a top-level bullet."""
    writeln_now(
        writer,
        prefix_first_rest_lines(BULLET_FIRST_PREFIX, BULLET_REST_PREFIX, text.strip()),
    )


def sub_bullet_prefix(text: str) -> str:
    """Return ``text`` laid out as a sub-bullet, without trailing newline."""
    return prefix_first_rest_lines(SUB_BULLET_FIRST_PREFIX, SUB_BULLET_REST_PREFIX, text.strip())


def sub_bullet(writer: ByteSink, text: str) -> None:
    """Write a nested bullet."""
    writeln_now(writer, sub_bullet_prefix(text))


def _announcement_prefix(_index: int, line: str) -> str:
    # Blank lines get a bare marker so no trailing whitespace is added.
    return "!" if line in ("", "\n") else "! "


def write_paragraph(writer: TrailingParagraphSink, color: ANSI, text: str) -> None:
    """Write an announcement paragraph: ``! ``-prefixed lines between blank lines."""
    contents = text.strip()
    if not writer.trailing_paragraph():
        writeln_now(writer)
    writeln_now(
        writer,
        wrap_ansi_escape_each_line(color, prefix_lines(contents, _announcement_prefix)),
    )
    writeln_now(writer)


def warning(writer: TrailingParagraphSink, text: str) -> None:
    """Write a warning paragraph."""
    write_paragraph(writer, WARNING_COLOR, text)


def error(writer: TrailingParagraphSink, text: str) -> None:
    """Write an error paragraph."""
    write_paragraph(writer, ERROR_COLOR, text)


def important(writer: TrailingParagraphSink, text: str) -> None:
    """Write an important-information paragraph."""
    write_paragraph(writer, IMPORTANT_COLOR, text)


def all_done(writer: ByteSink, started: float | None) -> None:
    """Write the final ``Done`` bullet, with the total elapsed time when known."""
    if started is None:
        bullet(writer, "Done")
    else:
        bullet(writer, f"Done (finished in {duration.human(time.monotonic() - started)})")


def start_print_interval(
    writer: W,
    text: str,
    *,
    interval: float = TIMER_TICK_INTERVAL,
) -> PrintGuard[W]:
    """Write ``text`` as a sub-bullet without newline and start the progress dots.

    Produces ``  - <text> ... `` followed, once the guard is stopped, by
    whatever the caller appends (duration, reason or drop marker).
    """
    write_now(writer, sub_bullet_prefix(text))
    return print_interval(
        writer,
        start=wrap_ansi_escape_each_line(TICK_COLOR, " ."),
        tick=wrap_ansi_escape_each_line(TICK_COLOR, "."),
        end=wrap_ansi_escape_each_line(TICK_COLOR, ". "),
        interval=interval,
    )


def stream_with(
    writer: TrailingParagraphSink,
    text: str,
    fn: Callable[[MappedWrite[ChannelWriter], MappedWrite[ChannelWriter]], T],
) -> T:
    """Announce ``text``, then stream two writers' output, indented, into ``writer``.

    ``fn`` receives two writer handles (conventionally stdout and stderr) that
    may be written to from any thread until ``fn`` returns. Each handle indents
    complete lines; a trailing partial line is flushed when ``fn`` returns.

    Args:
        writer (TrailingParagraphSink): Destination; only written by the consumer thread
            while ``fn`` runs.
        text (str): Sub-bullet label announcing the step.
        fn (Callable[[MappedWrite[ChannelWriter], MappedWrite[ChannelWriter]], T]): Producer.

    Returns:
        T: The value returned by ``fn``.

    Raises:
        LeakedHandleError: If ``fn`` returned one of its handles.
    """
    sub_bullet(writer, text)
    writeln_now(writer)
    started = time.monotonic()

    def produce(sender: ChannelWriter) -> T:
        out_handle = format_stream_writer(sender)
        err_handle = format_stream_writer(sender.clone())
        try:
            result = fn(out_handle, err_handle)
        finally:
            out_handle.close()
            err_handle.close()
        if result is out_handle or result is err_handle:
            raise LeakedHandleError("A stream writer handle was leaked out of the stream function.")
        return result

    def consume(messages: Iterator[bytes]) -> None:
        for message in messages:
            try:
                writer.write(message)
                writer.flush()
            except (OSError, ValueError) as exc:
                raise SinkClosedError("Writer to not be closed") from exc
        if not writer.trailing_paragraph():
            writeln_now(writer)
        sub_bullet(writer, f"Done {style.details(duration.human(time.monotonic() - started))}")

    logger.debug("streaming output for %r", text)
    return stream_to_output(produce, consume)
