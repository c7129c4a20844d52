# topmark:header:start
#
#   project      : bullet-stream
#   file         : output.py
#   file_relpath : src/bullet_stream/output.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Structured, hierarchical progress output as a state machine.

Use [`Print`][bullet_stream.output.Print] to write headers, bullets,
sub-bullets, streamed command output and background timers to a byte sink.
The output is meant to be read by the end user of a long-running tool such as
a build system or an installer.

```python
import sys

from bullet_stream import Print

output = Print.new(sys.stderr.buffer).h2("Example Buildpack").warning("No Gemfile.lock found")
output = output.bullet("Ruby version").done()
output.done()
```

States and transitions:

| State | Operation | Next state |
|---|---|---|
| `Header` | `h1`, `h2`, `h3`, `without_header` | `Bullet` |
| `Bullet` | `bullet` | `SubBullet` |
| `Bullet` | `h2`, `warning`, `important` | `Bullet` |
| `Bullet` | `done` | the raw sink (terminal) |
| `SubBullet` | `sub_bullet`, `warning`, `important` | `SubBullet` |
| `SubBullet` | `start_stream` | `Stream` |
| `SubBullet` | `start_timer` | `Background` |
| `SubBullet` | `done` | `Bullet` |
| `Stream` | `write`, `flush` | `Stream` (same handle) |
| `Stream` | `done` | `SubBullet` |
| `Background` | `done`, `cancel` | `SubBullet` |

`error` is available in `Bullet` and `SubBullet` and ends the output.

Every transition consumes the handle it is called on and returns a new one.
Calling an operation that the current state does not support raises
[`InvalidStateError`][bullet_stream.errors.InvalidStateError]; reusing a
consumed handle raises [`ConsumedHandleError`][bullet_stream.errors.ConsumedHandleError].
The ``self``-typed overloads let a type checker flag most misuse statically.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union, overload

from bullet_stream import command, duration, render, style
from bullet_stream.config.color import ColorMode, resolve_color_mode, sink_isatty
from bullet_stream.errors import ConsumedHandleError, InvalidStateError
from bullet_stream.global_writer import GlobalWriter
from bullet_stream.sinks.mapped import MappedWrite, format_stream_writer
from bullet_stream.sinks.paragraph import ParagraphInspectWrite
from bullet_stream.sinks.strip import AnsiStripWrite
from bullet_stream.sinks.write import writeln_now

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from pathlib import Path
    from types import TracebackType

    from bullet_stream.background import PrintGuard
    from bullet_stream.command import CommandOutcome
    from bullet_stream.multiplex import ChannelWriter
    from bullet_stream.sinks.api import ByteSink

T = TypeVar("T")


@dataclass
class Header:
    """Nothing has been shown yet; announce the tool with a header or skip it."""

    write: ParagraphInspectWrite[Any]


@dataclass
class Bullet:
    """Top-level sections, each one a noun such as 'Ruby version'."""

    write: ParagraphInspectWrite[Any]


@dataclass
class SubBullet:
    """Steps within a section, each one a verb such as 'Downloading'."""

    write: ParagraphInspectWrite[Any]


@dataclass
class Stream:
    """Raw output (usually from a subprocess) is being streamed, indented."""

    write: MappedWrite[ParagraphInspectWrite[Any]]
    started: float = field(default_factory=time.monotonic)


@dataclass
class Background:
    """A long-running step is annotated with periodic progress dots."""

    write: PrintGuard[ParagraphInspectWrite[Any]]
    started: float = field(default_factory=time.monotonic)


State = Union[Header, Bullet, SubBullet, Stream, Background]

S = TypeVar("S", Header, Bullet, SubBullet, Stream, Background)


class Print(Generic[S]):
    """Output handle in state ``S``.

    Attributes:
        state (S): Current state payload, owning the sink.
        started (float | None): `time.monotonic()` reading taken when the output
            started, used for the final ``Done (finished in ...)`` line.
    """

    def __init__(self, state: S, *, started: float | None = None, raw: ByteSink) -> None:
        self.state: S = state
        self.started = started
        self._raw = raw
        self._consumed = False

    # -- construction -------------------------------------------------------

    @classmethod
    def new(cls, sink: ByteSink, *, color: bool | ColorMode = True) -> Print[Header]:
        """Create an output handle writing to ``sink``, without announcing anything.

        Args:
            sink (ByteSink): Destination, e.g. `io.BytesIO` or ``sys.stderr.buffer``.
            color (bool | ColorMode): Whether to emit ANSI colors. A `ColorMode` is
                resolved against the environment and the sink's TTY status.

        Returns:
            Print[Header]: A handle in the `Header` state.
        """
        if isinstance(color, ColorMode):
            color = resolve_color_mode(color_mode_override=color, stream_isatty=sink_isatty(sink))
        inner: ByteSink = sink if color else AnsiStripWrite(sink)
        return Print(Header(ParagraphInspectWrite(inner)), raw=sink)

    @classmethod
    def global_(cls) -> Print[Header]:
        """Create an output handle writing to the process-wide global writer.

        To change the destination see
        [`set_writer`][bullet_stream.global_writer.set_writer].
        """
        marker = GlobalWriter()
        write = ParagraphInspectWrite(
            marker,
            was_paragraph=marker.trailing_paragraph(),
            newlines_since_last_char=marker.trailing_newline_count(),
        )
        return Print(Header(write), raw=marker)

    # -- state bookkeeping ----------------------------------------------------

    def _check(self, operation: str, *allowed: type[State]) -> Any:
        if self._consumed:
            raise ConsumedHandleError(
                f"'{operation}' called on a Print handle that was already consumed"
            )
        if not isinstance(self.state, allowed):
            raise InvalidStateError(operation, type(self.state).__name__)
        return self.state

    def _take(self, operation: str, *allowed: type[State]) -> Any:
        state = self._check(operation, *allowed)
        self._consumed = True
        return state

    def _next(self, state: T) -> Print[Any]:
        return Print(state, started=self.started, raw=self._raw)  # type: ignore[type-var]

    @property
    def consumed(self) -> bool:
        """True once a transition has replaced this handle."""
        return self._consumed

    # -- Header ---------------------------------------------------------------

    def h1(self: Print[Header], text: str) -> Print[Bullet]:
        """Announce the start of the output with a level 1 header.

        Use the human-readable name of the tool, e.g. ``Ruby Buildpack``,
        without a final period.
        """
        state: Header = self._take("h1", Header)
        render.h1(state.write, text)
        return Print(Bullet(state.write), started=time.monotonic(), raw=self._raw)

    @overload
    def h2(self: Print[Header], text: str) -> Print[Bullet]: ...

    @overload
    def h2(self: Print[Bullet], text: str) -> Print[Bullet]: ...

    def h2(self, text: str) -> Print[Bullet]:
        """Write a level 2 header.

        From `Header` this starts the output; from `Bullet` it opens a new
        group of sections.
        """
        state: Header | Bullet = self._take("h2", Header, Bullet)
        render.h2(state.write, text)
        if isinstance(state, Header):
            return Print(Bullet(state.write), started=time.monotonic(), raw=self._raw)
        return self._next(Bullet(state.write))

    def h3(self: Print[Header], text: str) -> Print[Bullet]:
        """Announce the start of the output with a level 3 header."""
        state: Header = self._take("h3", Header)
        render.h3(state.write, text)
        return Print(Bullet(state.write), started=time.monotonic(), raw=self._raw)

    def without_header(self: Print[Header]) -> Print[Bullet]:
        """Start the output without announcing a name."""
        state: Header = self._take("without_header", Header)
        return Print(Bullet(state.write), started=time.monotonic(), raw=self._raw)

    # -- Bullet -----------------------------------------------------------------

    def bullet(self: Print[Bullet], text: str) -> Print[SubBullet]:
        """Open a top-level section.

        A section should be a noun, e.g. 'Ruby version'. If the steps below it
        depend on input, consider including the deciding values in the name,
        e.g. 'Ruby version `3.1.3` from `Gemfile.lock`'.
        """
        state: Bullet = self._take("bullet", Bullet)
        render.bullet(state.write, text)
        return self._next(SubBullet(state.write))

    # -- announcements (Bullet and SubBullet) -----------------------------------

    @overload
    def warning(self: Print[Bullet], text: str) -> Print[Bullet]: ...

    @overload
    def warning(self: Print[SubBullet], text: str) -> Print[SubBullet]: ...

    def warning(self, text: str) -> Print[Any]:
        """Emit a warning paragraph and keep going.

        Describe the problem and, if possible, how to fix it or where to look
        next. If the user can turn the warning off, say how.
        """
        state: Bullet | SubBullet = self._take("warning", Bullet, SubBullet)
        render.warning(state.write, text)
        return self._next(state)

    @overload
    def important(self: Print[Bullet], text: str) -> Print[Bullet]: ...

    @overload
    def important(self: Print[SubBullet], text: str) -> Print[SubBullet]: ...

    def important(self, text: str) -> Print[Any]:
        """Emit a paragraph about something significant but not inherently negative."""
        state: Bullet | SubBullet = self._take("important", Bullet, SubBullet)
        render.important(state.write, text)
        return self._next(state)

    def error(self: Print[Bullet] | Print[SubBullet], text: str) -> None:
        """Emit an error paragraph and end the output.

        Explain what went wrong and why the tool cannot continue; include the
        debugging information the user needs, such as the expected path of a
        missing file. No further output is possible on this handle.
        """
        state: Bullet | SubBullet = self._take("error", Bullet, SubBullet)
        render.error(state.write, text)

    # -- SubBullet --------------------------------------------------------------

    def sub_bullet(self: Print[SubBullet], text: str) -> Print[SubBullet]:
        """Emit a step under the current section.

        A step should be a short verb phrase, e.g. 'Downloading'. If the tool
        did something different from the previous run (clearing a cache, for
        instance), say so here.
        """
        state: SubBullet = self._take("sub_bullet", SubBullet)
        render.sub_bullet(state.write, text)
        return self._next(SubBullet(state.write))

    def start_stream(self: Print[SubBullet], text: str) -> Print[Stream]:
        """Announce ``text`` and start streaming raw output, indented, to the user.

        The returned handle is a binary file-like object (``write``/``flush``).
        """
        state: SubBullet = self._take("start_stream", SubBullet)
        render.sub_bullet(state.write, text)
        writeln_now(state.write)
        return self._next(Stream(format_stream_writer(state.write)))

    def start_timer(self: Print[SubBullet], text: str) -> Print[Background]:
        """Announce ``text`` and print progress dots until the timer is finished.

        Use for long-running work that produces no output of its own, such as
        a download, so the user can see the tool is not stuck.
        """
        state: SubBullet = self._take("start_timer", SubBullet)
        guard = render.start_print_interval(state.write, text)
        return self._next(Background(guard))

    def stream_with(
        self: Print[SubBullet],
        text: str,
        fn: Callable[[MappedWrite[ChannelWriter], MappedWrite[ChannelWriter]], T],
    ) -> T:
        """Announce ``text`` and stream two concurrent writers without consuming the handle.

        ``fn`` receives two binary writers, conventionally for a command's
        stdout and stderr, and may use them from any thread until it returns.
        Its return value is returned.
        """
        state: SubBullet = self._check("stream_with", SubBullet)
        return render.stream_with(state.write, text, fn)

    def stream_cmd(
        self: Print[SubBullet],
        args: Sequence[str],
        *,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandOutcome:
        """Announce and run a command while streaming its output.

        Returns:
            CommandOutcome: The command's output, or a `CommandError` describing
                why it failed.
        """
        state: SubBullet = self._check("stream_cmd", SubBullet)
        return render.stream_with(
            state.write,
            style.running_command(command.command_name(args)),
            lambda stdout, stderr: command.run_streamed(args, stdout, stderr, cwd=cwd, env=env),
        )

    def time_cmd(
        self: Print[SubBullet],
        args: Sequence[str],
        *,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandOutcome:
        """Announce and run a command quietly while printing progress dots.

        Returns:
            CommandOutcome: The command's output, or a `CommandError` describing
                why it failed.
        """
        state: SubBullet = self._check("time_cmd", SubBullet)
        started = time.monotonic()
        guard = render.start_print_interval(
            state.write, style.running_command(command.command_name(args))
        )
        try:
            outcome = command.run_quiet(args, cwd=cwd, env=env)
        except BaseException:
            guard.close()
            raise
        writer = guard.stop()
        writeln_now(writer, style.details(duration.human(time.monotonic() - started)))
        return outcome

    # -- Stream -------------------------------------------------------------------

    def write(self: Print[Stream], data: bytes | bytearray | str) -> int:
        """Stream ``data`` to the user; complete lines are indented and forwarded."""
        state: Stream = self._check("write", Stream)
        if isinstance(data, str):
            data = data.encode("utf-8")
        return state.write.write(data)

    def flush(self: Print[Stream]) -> None:
        """Flush the underlying sink (an incomplete line stays buffered)."""
        state: Stream = self._check("flush", Stream)
        state.write.flush()

    # -- Background -----------------------------------------------------------------

    def cancel(self: Print[Background], reason: str) -> Print[SubBullet]:
        """Stop the timer, explaining why in place of its duration.

        Produces ``  - <label> ... (<reason>)``.
        """
        state: Background = self._take("cancel", Background)
        writer = state.write.stop()
        writeln_now(writer, style.details(reason))
        return self._next(SubBullet(writer))

    # -- done -------------------------------------------------------------------

    @overload
    def done(self: Print[Bullet]) -> ByteSink: ...

    @overload
    def done(self: Print[SubBullet]) -> Print[Bullet]: ...

    @overload
    def done(self: Print[Stream]) -> Print[SubBullet]: ...

    @overload
    def done(self: Print[Background]) -> Print[SubBullet]: ...

    def done(self) -> ByteSink | Print[Any]:
        """Finish the current state.

        - `Bullet`: write ``- Done (finished in <duration>)`` and return the raw sink.
        - `SubBullet`: close the section and return to `Bullet`.
        - `Stream`: flush any partial line, then write ``  - Done (<duration>)``.
        - `Background`: stop the dots and write ``(<duration>)``.
        """
        state: Bullet | SubBullet | Stream | Background = self._take(
            "done", Bullet, SubBullet, Stream, Background
        )
        if isinstance(state, Bullet):
            render.all_done(state.write, self.started)
            return self._raw
        if isinstance(state, SubBullet):
            return self._next(Bullet(state.write))
        if isinstance(state, Stream):
            elapsed = time.monotonic() - state.started
            writer = state.write.unwrap()
            if not writer.trailing_paragraph():
                writeln_now(writer)
            render.sub_bullet(writer, f"Done {style.details(duration.human(elapsed))}")
            return self._next(SubBullet(writer))
        elapsed = time.monotonic() - state.started
        writer = state.write.stop()
        writeln_now(writer, style.details(duration.human(elapsed)))
        return self._next(SubBullet(writer))

    # -- scoped release -------------------------------------------------------

    def __enter__(self) -> Print[S]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release resources still owned by an unfinished handle.

        A running timer is stopped and flagged with ``(Error)``; a stream
        forwards its partial last line.
        """
        if self._consumed:
            return
        if isinstance(self.state, Background):
            self._consumed = True
            self.state.write.close()
        elif isinstance(self.state, Stream):
            self._consumed = True
            self.state.write.close()

    def __repr__(self) -> str:
        status = "consumed" if self._consumed else type(self.state).__name__
        return f"Print<{status}>(started={self.started!r})"
