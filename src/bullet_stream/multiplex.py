# topmark:header:start
#
#   project      : bullet-stream
#   file         : multiplex.py
#   file_relpath : src/bullet_stream/multiplex.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Funnel several concurrent writers into one ordered consumer.

[`stream_to_output`][bullet_stream.multiplex.stream_to_output] starts a
consumer thread draining a message channel, then calls the producer with a
[`ChannelWriter`][bullet_stream.multiplex.ChannelWriter]. The writer can be
cloned, typically once for a subprocess's stdout and once for its stderr;
every ``write()`` call becomes one message.

Ordering: messages from a single handle keep their write order; messages from
different handles are consumed in arrival order, which is not deterministic.

Completion: when the producer returns (or raises) the channel is closed, the
consumer drains what is left and is joined before the call returns. Handles
used after that point raise [`SinkClosedError`][bullet_stream.errors.SinkClosedError].
A producer returning one of its handles is a programming error reported with
[`LeakedHandleError`][bullet_stream.errors.LeakedHandleError].
"""

from __future__ import annotations

import queue
import threading
from typing import TYPE_CHECKING, TypeVar

from bullet_stream.config.logging import get_logger
from bullet_stream.errors import LeakedHandleError, SinkClosedError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from bullet_stream.config.logging import BulletStreamLogger

logger: BulletStreamLogger = get_logger(__name__)

T = TypeVar("T")

_CLOSED = object()


class _Channel:
    """Unbounded FIFO with an explicit close marker."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[bytes | object] = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self.messages = 0

    def send(self, message: bytes) -> None:
        with self._lock:
            if self._closed:
                raise SinkClosedError("Channel to be open: the stream was already finished")
            self.messages += 1
            self._queue.put(message)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            message = self._queue.get()
            if message is _CLOSED:
                return
            yield message  # type: ignore[misc]


class ChannelWriter:
    """Binary writer that sends each write as one message to a shared channel.

    Safe to use from several threads at once.
    """

    def __init__(self, channel: _Channel) -> None:
        self._channel = channel

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Send a copy of ``data`` as a single message."""
        message = bytes(data)
        self._channel.send(message)
        return len(message)

    def flush(self) -> None:
        """Messages are delivered as they are written; nothing to flush."""

    def clone(self) -> ChannelWriter:
        """Return another handle feeding the same channel."""
        return ChannelWriter(self._channel)


class _Consumer(threading.Thread):
    def __init__(self, output: Callable[[Iterator[bytes]], None], channel: _Channel) -> None:
        super().__init__(name="bullet-stream-multiplex", daemon=True)
        self._output = output
        self._channel = channel
        self.failure: BaseException | None = None

    def run(self) -> None:
        try:
            self._output(iter(self._channel))
        except BaseException as exc:  # re-raised in the joining thread
            self.failure = exc
            # Keep draining so producers never block on a dead consumer.
            for _ in self._channel:
                pass


def stream_to_output(
    stream: Callable[[ChannelWriter], T],
    output: Callable[[Iterator[bytes]], None],
) -> T:
    """Run ``stream`` with a channel writer while ``output`` consumes its messages.

    Args:
        stream (Callable[[ChannelWriter], T]): Producer; receives the first handle
            and may `clone()` it. Runs on the calling thread.
        output (Callable[[Iterator[bytes]], None]): Consumer; receives an iterator of
            messages that ends once the producer has returned. Runs on a
            dedicated thread.

    Returns:
        T: The producer's return value.

    Raises:
        LeakedHandleError: If the producer returned a `ChannelWriter`.
        BaseException: Whatever the producer or the consumer raised, unchanged.
    """
    channel = _Channel()
    consumer = _Consumer(output, channel)
    consumer.start()
    logger.debug("multiplexer session started")

    try:
        out = stream(ChannelWriter(channel))
    finally:
        channel.close()
        consumer.join()
        logger.debug("multiplexer session finished (%d message(s))", channel.messages)

    if consumer.failure is not None:
        raise consumer.failure
    if isinstance(out, ChannelWriter):
        raise LeakedHandleError("The ChannelWriter was leaked out of the stream function.")
    return out
