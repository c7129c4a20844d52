# topmark:header:start
#
#   project      : bullet-stream
#   file         : global_writer.py
#   file_relpath : src/bullet_stream/global_writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Process-wide, swappable output sink.

[`Print.global_()`][bullet_stream.Print.global_] writes through
[`GlobalWriter`][bullet_stream.global_writer.GlobalWriter], a marker sink that
forwards every call to the current process-wide writer. That writer starts
out as the binary standard error stream and can be replaced with:

- [`set_writer`][bullet_stream.global_writer.set_writer]: permanent replacement.
- [`locked_writer`][bullet_stream.global_writer.locked_writer] /
  [`with_locked_writer`][bullet_stream.global_writer.with_locked_writer]:
  a scoped override, typically used by tests to capture output.

Coordination rules:
    * Every access to the current writer happens under one lock. A failure
      raised while that lock is held poisons the shared state; later access
      raises [`LockPoisonedError`][bullet_stream.errors.LockPoisonedError].
    * Scoped overrides are serialized across threads by a second lock and may
      not be nested on one thread
      ([`ReentrancyError`][bullet_stream.errors.ReentrancyError]).
    * The original writer is restored on every exit path of the scope. If the
      writer removed at that point is not the one the scope installed, the
      writer was changed behind the scope's back and
      [`GlobalWriterError`][bullet_stream.errors.GlobalWriterError] is raised.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

import click

from bullet_stream.config.logging import get_logger
from bullet_stream.errors import GlobalWriterError, LockPoisonedError, ReentrancyError
from bullet_stream.sinks.paragraph import ParagraphInspectWrite

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from bullet_stream.config.logging import BulletStreamLogger
    from bullet_stream.sinks.api import ByteSink

logger: BulletStreamLogger = get_logger(__name__)

T = TypeVar("T")


def _default_writer() -> ParagraphInspectWrite[ByteSink]:
    return ParagraphInspectWrite(click.get_binary_stream("stderr"))


class _GlobalState:
    """The process-wide writer and the primitives coordinating access to it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.scope_lock = threading.Lock()
        self.thread_local = threading.local()
        self.writer: ParagraphInspectWrite[ByteSink] | None = None
        self.poisoned = False

    @contextmanager
    def locked(self) -> Iterator[ParagraphInspectWrite[ByteSink]]:
        """Hold the writer lock and yield the current writer (initialized lazily)."""
        with self.lock:
            if self.poisoned:
                raise LockPoisonedError("Global writer lock poisoned by an earlier failure")
            if self.writer is None:
                self.writer = _default_writer()
            try:
                yield self.writer
            except BaseException:
                self.poisoned = True
                raise

    def in_scope(self) -> bool:
        return getattr(self.thread_local, "in_scope", False)

    def set_in_scope(self, value: bool) -> None:
        self.thread_local.in_scope = value


_STATE = _GlobalState()


class GlobalWriter:
    """Marker sink forwarding to whatever the current global writer is."""

    def write(self, data: bytes) -> int:
        """Write ``data`` to the current global writer."""
        with _STATE.locked() as writer:
            return writer.write(data)

    def flush(self) -> None:
        """Flush the current global writer."""
        with _STATE.locked() as writer:
            writer.flush()

    def trailing_paragraph(self) -> bool:
        """Return True if the global output currently ends with a blank line."""
        with _STATE.locked() as writer:
            return writer.trailing_paragraph()

    def trailing_newline_count(self) -> int:
        """Return the trailing newline run length of the global output."""
        with _STATE.locked() as writer:
            return writer.trailing_newline_count()

    def __repr__(self) -> str:
        return "GlobalWriter()"


def _reject_self_reference(new_writer: ByteSink) -> None:
    if isinstance(new_writer, GlobalWriter):
        raise GlobalWriterError("Cannot set the global writer to GlobalWriter")


def set_writer(new_writer: ByteSink) -> None:
    """Replace the process-wide writer.

    Args:
        new_writer (ByteSink): The new destination for global output.

    Raises:
        GlobalWriterError: If ``new_writer`` is the `GlobalWriter` marker itself.
    """
    _reject_self_reference(new_writer)
    with _STATE.lock:
        if _STATE.poisoned:
            raise LockPoisonedError("Global writer lock poisoned by an earlier failure")
        _STATE.writer = ParagraphInspectWrite(new_writer)
    logger.debug("global writer set to %r", new_writer)


@contextmanager
def locked_writer(new_writer: ByteSink) -> Iterator[None]:
    """Install ``new_writer`` as the global writer for the duration of a ``with`` block.

    Args:
        new_writer (ByteSink): Temporary destination for global output.

    Yields:
        None: Control while the override is active.

    Raises:
        GlobalWriterError: If ``new_writer`` is the `GlobalWriter` marker, or if the
            global writer was replaced by other means during the block.
        ReentrancyError: If the calling thread is already inside a scoped override.
    """
    _reject_self_reference(new_writer)
    if _STATE.in_scope():
        raise ReentrancyError("Nested scoped global writer override on the same thread")

    _STATE.set_in_scope(True)
    try:
        with _STATE.scope_lock:
            installed = ParagraphInspectWrite(new_writer)
            with _STATE.locked() as current:
                original = current
                _STATE.writer = installed
            logger.debug("global writer scoped to %r", new_writer)
            try:
                yield
            finally:
                with _STATE.lock:
                    swapped_out = _STATE.writer
                    _STATE.writer = original
                logger.debug("global writer restored to %r", original.inner)
                if swapped_out is not installed:
                    raise GlobalWriterError(
                        "Global writer was changed while a scoped override was active"
                    )
    finally:
        _STATE.set_in_scope(False)


def with_locked_writer(new_writer: ByteSink, body: Callable[[], T]) -> T:
    """Run ``body`` with ``new_writer`` installed as the global writer.

    Functional form of [`locked_writer`][bullet_stream.global_writer.locked_writer].

    Args:
        new_writer (ByteSink): Temporary destination for global output.
        body (Callable[[], T]): Code to run while the override is active.

    Returns:
        T: The value returned by ``body``.
    """
    with locked_writer(new_writer):
        return body()
