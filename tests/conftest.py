# topmark:header:start
#
#   project      : bullet-stream
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the bullet-stream test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    Tests that touch the process-wide writer get a fresh coordinator state per
    test through the autouse `isolated_global_writer` fixture, so a poisoned
    lock or a leftover writer never leaks from one test to the next.

    Durations are wall-clock dependent; compare output through
    `normalize_durations` instead of asserting on exact timings.
"""

from __future__ import annotations

import io
import re
from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from bullet_stream import Print, global_writer
from bullet_stream.ansi import strip_ansi
from bullet_stream.config import logging

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

ELAPSED: str = "<elapsed>"

_DURATION_RE: re.Pattern[str] = re.compile(
    r"< 0\.1s|\d+h \d+m \d+s|\d+m \d+s|\d+\.\d+s"
)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_bullet_stream_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment from changing test behavior.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture(autouse=True)
def isolated_global_writer(monkeypatch: pytest.MonkeyPatch) -> global_writer._GlobalState:
    """Give every test its own process-wide writer state.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to swap the module-level state.

    Returns:
        global_writer._GlobalState: The fresh state installed for the test.
    """
    state = global_writer._GlobalState()  # pyright: ignore[reportPrivateUsage]
    monkeypatch.setattr(global_writer, "_STATE", state)
    return state


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    Sets the package log level to TRACE so diagnostics are captured alongside
    failing tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def normalize_durations(text: str) -> str:
    """Replace every humanized duration in ``text`` with ``<elapsed>``."""
    return _DURATION_RE.sub(ELAPSED, text)


def decoded(buffer: io.BytesIO, *, strip: bool = True) -> str:
    """Return the UTF-8 contents of ``buffer``, optionally stripped of color.

    Args:
        buffer (io.BytesIO): Buffer written by a `Print` handle.
        strip (bool): Remove ANSI escape sequences.

    Returns:
        str: The decoded text.
    """
    text = buffer.getvalue().decode("utf-8")
    return strip_ansi(text) if strip else text


def new_output(*, color: bool = True) -> tuple[io.BytesIO, Print[Any]]:
    """Return an in-memory buffer and a `Header` handle writing to it.

    Args:
        color (bool): Forwarded to `Print.new`.

    Returns:
        tuple[io.BytesIO, Print[Any]]: The buffer and the handle.
    """
    buffer = io.BytesIO()
    return buffer, Print.new(buffer, color=color)
