# topmark:header:start
#
#   project      : bullet-stream
#   file         : test_background.py
#   file_relpath : tests/test_background.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Background progress printer and its guard."""

from __future__ import annotations

import gc
import io
import threading
import time

import pytest

from bullet_stream.background import print_interval
from bullet_stream.errors import ConsumedHandleError, SinkClosedError


class _ClosedSink:
    def write(self, data: bytes) -> int:
        raise ValueError("I/O operation on closed file.")

    def flush(self) -> None:
        pass


def test_stop_immediately_writes_start_one_tick_and_end() -> None:
    buffer = io.BytesIO()
    guard = print_interval(buffer, start="<", tick=".", end=">", interval=10.0)
    assert guard.running
    assert guard.stop() is buffer
    assert not guard.running
    assert buffer.getvalue() == b"<.>"


def test_ticks_every_interval() -> None:
    buffer = io.BytesIO()
    guard = print_interval(buffer, start="<", tick=".", end=">", interval=0.02)
    time.sleep(0.3)
    guard.stop()
    output = buffer.getvalue()
    assert output.startswith(b"<") and output.endswith(b">")
    assert output.count(b".") >= 2


def test_stop_twice_is_rejected() -> None:
    guard = print_interval(io.BytesIO(), start="", tick=".", end="", interval=10.0)
    guard.stop()
    with pytest.raises(ConsumedHandleError):
        guard.stop()


def test_close_without_stop_writes_drop_marker() -> None:
    buffer = io.BytesIO()
    guard = print_interval(buffer, start=" .", tick=".", end=". ", interval=10.0)
    guard.close()
    assert buffer.getvalue() == b" ... (Error)\n"


def test_close_after_stop_writes_nothing_more() -> None:
    buffer = io.BytesIO()
    guard = print_interval(buffer, start="<", tick=".", end=">", interval=10.0)
    guard.stop()
    guard.close()
    assert buffer.getvalue() == b"<.>"


def test_context_manager_flags_unfinished_timer() -> None:
    buffer = io.BytesIO()
    with pytest.raises(RuntimeError, match="boom"):
        with print_interval(buffer, start="<", tick=".", end=">", interval=10.0):
            raise RuntimeError("boom")
    assert buffer.getvalue() == b"<.>(Error)\n"


def test_garbage_collected_guard_flags_unfinished_timer() -> None:
    buffer = io.BytesIO()
    guard = print_interval(buffer, start="<", tick=".", end=">", interval=10.0)
    del guard
    gc.collect()
    assert buffer.getvalue() == b"<.>(Error)\n"


def test_custom_drop_message() -> None:
    buffer = io.BytesIO()
    guard = print_interval(
        buffer, start="", tick="", end="", interval=10.0, drop_message="(Interrupted)"
    )
    guard.close()
    assert buffer.getvalue() == b"(Interrupted)\n"


def test_worker_failure_is_raised_by_stop() -> None:
    guard = print_interval(_ClosedSink(), start="<", tick=".", end=">", interval=10.0)
    with pytest.raises(SinkClosedError):
        guard.stop()


def test_worker_runs_on_its_own_thread() -> None:
    names: list[str] = []

    class Recorder(io.BytesIO):
        def write(self, data: bytes) -> int:  # type: ignore[override]
            names.append(threading.current_thread().name)
            return super().write(data)

    guard = print_interval(Recorder(), start="<", tick=".", end=">", interval=10.0)
    guard.stop()
    assert names
    assert all(name == "bullet-stream-timer" for name in names)
