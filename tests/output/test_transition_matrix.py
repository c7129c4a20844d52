# topmark:header:start
#
#   project      : bullet-stream
#   file         : test_transition_matrix.py
#   file_relpath : tests/output/test_transition_matrix.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Every (state, operation) pair of the `Print` state machine.

Valid pairs must succeed; every other pair must raise `InvalidStateError`
without consuming the handle. Consumed handles reject any further use.
"""

from __future__ import annotations

import io
import sys
from typing import TYPE_CHECKING, Any

import pytest

from bullet_stream import Print
from bullet_stream.errors import ConsumedHandleError, InvalidStateError
from tests.conftest import parametrize

if TYPE_CHECKING:
    from collections.abc import Callable

QUIET_CMD: list[str] = [sys.executable, "-c", "pass"]


def _header() -> Print[Any]:
    return Print.new(io.BytesIO())


def _bullet() -> Print[Any]:
    return _header().without_header()


def _sub_bullet() -> Print[Any]:
    return _bullet().bullet("section")


def _stream() -> Print[Any]:
    return _sub_bullet().start_stream("streaming")


def _background() -> Print[Any]:
    return _sub_bullet().start_timer("waiting")


STATES: dict[str, Callable[[], Print[Any]]] = {
    "Header": _header,
    "Bullet": _bullet,
    "SubBullet": _sub_bullet,
    "Stream": _stream,
    "Background": _background,
}

OPERATIONS: dict[str, Callable[[Print[Any]], object]] = {
    "h1": lambda p: p.h1("title"),
    "h2": lambda p: p.h2("title"),
    "h3": lambda p: p.h3("title"),
    "without_header": lambda p: p.without_header(),
    "bullet": lambda p: p.bullet("section"),
    "sub_bullet": lambda p: p.sub_bullet("step"),
    "warning": lambda p: p.warning("careful"),
    "important": lambda p: p.important("note"),
    "error": lambda p: p.error("failed"),
    "done": lambda p: p.done(),
    "start_stream": lambda p: p.start_stream("streaming"),
    "start_timer": lambda p: p.start_timer("waiting"),
    "cancel": lambda p: p.cancel("stopped"),
    "write": lambda p: p.write(b"data\n"),
    "flush": lambda p: p.flush(),
    "stream_with": lambda p: p.stream_with("streaming", lambda _out, _err: None),
    "stream_cmd": lambda p: p.stream_cmd(QUIET_CMD),
    "time_cmd": lambda p: p.time_cmd(QUIET_CMD),
}

VALID: dict[str, set[str]] = {
    "Header": {"h1", "h2", "h3", "without_header"},
    "Bullet": {"h2", "bullet", "warning", "important", "error", "done"},
    "SubBullet": {
        "sub_bullet",
        "warning",
        "important",
        "error",
        "done",
        "start_stream",
        "start_timer",
        "stream_with",
        "stream_cmd",
        "time_cmd",
    },
    "Stream": {"write", "flush", "done"},
    "Background": {"done", "cancel"},
}

# Operations that leave the handle usable afterwards.
NON_CONSUMING: set[str] = {"write", "flush", "stream_with", "stream_cmd", "time_cmd"}

PAIRS: list[tuple[str, str]] = [(state, op) for state in STATES for op in OPERATIONS]


def _release(value: object) -> None:
    if isinstance(value, Print):
        value.__exit__(None, None, None)


@parametrize("state, operation", PAIRS)
def test_transition(state: str, operation: str) -> None:
    handle = STATES[state]()
    try:
        if operation in VALID[state]:
            _release(OPERATIONS[operation](handle))
            assert handle.consumed is (operation not in NON_CONSUMING)
        else:
            with pytest.raises(InvalidStateError) as excinfo:
                OPERATIONS[operation](handle)
            assert excinfo.value.operation == operation
            assert excinfo.value.state == state
            assert not handle.consumed
    finally:
        _release(handle)


def test_every_operation_is_valid_somewhere() -> None:
    assert set().union(*VALID.values()) == set(OPERATIONS)


@parametrize("operation", sorted(OPERATIONS))
def test_consumed_handle_rejects_everything(operation: str) -> None:
    handle = _sub_bullet()
    handle.sub_bullet("next")
    with pytest.raises(ConsumedHandleError):
        OPERATIONS[operation](handle)


def test_invalid_state_message_names_operation_and_state() -> None:
    with pytest.raises(InvalidStateError, match="'bullet' is not a valid operation in the Header"):
        _header().bullet("too early")
