# topmark:header:start
#
#   project      : bullet-stream
#   file         : background.py
#   file_relpath : src/bullet_stream/background.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Background progress printer for long-running, non-streaming steps.

[`print_interval`][bullet_stream.background.print_interval] hands a sink to a
worker thread that writes a start mark, then one tick per interval until it is
told to stop, then an end mark. The returned
[`PrintGuard`][bullet_stream.background.PrintGuard] owns that thread:

- `stop()` signals the worker, joins it and hands the sink back.
- Releasing the guard any other way (`close()`, leaving a ``with`` block, or
  garbage collection) also stops the worker, then writes the drop marker so an
  unfinished step is visibly flagged as ``(Error)``.

Cancellation is cooperative: the worker checks its stop signal between ticks,
so the latency to observe it is at most one interval.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Generic, TypeVar

from bullet_stream.config.logging import get_logger
from bullet_stream.constants import TIMER_DROP_MARKER, TIMER_TICK_INTERVAL
from bullet_stream.errors import ConsumedHandleError
from bullet_stream.sinks.write import write_now, writeln_now

if TYPE_CHECKING:
    from types import TracebackType

    from bullet_stream.config.logging import BulletStreamLogger
    from bullet_stream.sinks.api import ByteSink

logger: BulletStreamLogger = get_logger(__name__)

W = TypeVar("W", bound="ByteSink")


class _Worker(threading.Thread):
    """Thread that prints the progress marks and records its own failure."""

    def __init__(
        self,
        writer: ByteSink,
        stop_event: threading.Event,
        interval: float,
        start: str,
        tick: str,
        end: str,
    ) -> None:
        super().__init__(name="bullet-stream-timer", daemon=True)
        self.writer = writer
        self.stop_event = stop_event
        self.interval = interval
        self.start_mark = start
        self.tick_mark = tick
        self.end_mark = end
        self.failure: BaseException | None = None

    def run(self) -> None:
        try:
            write_now(self.writer, self.start_mark)
            ticks = 0
            while True:
                write_now(self.writer, self.tick_mark)
                ticks += 1
                if self.stop_event.wait(self.interval):
                    break
            write_now(self.writer, self.end_mark)
            logger.trace("timer worker finished after %d tick(s)", ticks)
        except BaseException as exc:  # re-raised in the joining thread
            self.failure = exc


class PrintGuard(Generic[W]):
    """Owns a running background printer and the sink it writes to.

    The guard moves from running to stopped exactly once.

    Attributes:
        drop_message (str): Line written when the guard is released without `stop()`.
    """

    def __init__(self, worker: _Worker, stop_event: threading.Event, drop_message: str) -> None:
        self._worker = worker
        self._stop_event = stop_event
        self.drop_message = drop_message
        self._stopped = False

    @property
    def running(self) -> bool:
        """True until the guard has been stopped or released."""
        return not self._stopped

    def stop(self) -> W:
        """Signal the worker to stop, wait for it and return the sink.

        Returns:
            W: The sink, positioned right after the end mark.

        Raises:
            ConsumedHandleError: If the guard was already stopped.
            BaseException: Whatever the worker thread raised, unchanged.
        """
        if self._stopped:
            raise ConsumedHandleError("Background printer was already stopped")
        self._stopped = True
        self._stop_event.set()
        self._worker.join()
        logger.debug("background printer stopped")
        if self._worker.failure is not None:
            raise self._worker.failure
        return self._worker.writer  # type: ignore[return-value]

    def close(self) -> None:
        """Release the guard; an unstopped printer is stopped and flagged with the drop marker."""
        if self._stopped:
            return
        writer = self.stop()
        writeln_now(writer, self.drop_message)

    def __enter__(self) -> PrintGuard[W]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_stopped", True):
            self.close()


def print_interval(
    writer: W,
    *,
    start: str,
    tick: str,
    end: str,
    interval: float = TIMER_TICK_INTERVAL,
    drop_message: str = TIMER_DROP_MARKER,
) -> PrintGuard[W]:
    """Start printing ``tick`` to ``writer`` every ``interval`` seconds on a worker thread.

    The calling thread is not blocked. The worker writes ``start`` and a first
    ``tick`` immediately, one more ``tick`` per elapsed interval, and ``end``
    once stopped.

    Args:
        writer (W): Sink owned by the worker until the guard is stopped.
        start (str): Mark written once, before the first tick.
        tick (str): Mark written at every interval.
        end (str): Mark written once after the stop signal.
        interval (float): Seconds between ticks.
        drop_message (str): Line written if the guard is released without `stop()`.

    Returns:
        PrintGuard[W]: Guard owning the worker thread and the sink.
    """
    stop_event = threading.Event()
    worker = _Worker(writer, stop_event, interval, start, tick, end)
    worker.start()
    logger.debug("background printer started (interval=%ss)", interval)
    return PrintGuard(worker, stop_event, drop_message)
