# topmark:header:start
#
#   project      : bullet-stream
#   file         : test_color.py
#   file_relpath : tests/config/test_color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-mode resolution precedence: override, environment, TTY."""

from __future__ import annotations

import io

import pytest

from bullet_stream.config.color import ColorMode, resolve_color_mode, sink_isatty


class _Tty(io.BytesIO):
    def isatty(self) -> bool:
        return True


def test_override_wins_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.ALWAYS, stream_isatty=False)

    monkeypatch.setenv("FORCE_COLOR", "1")
    assert not resolve_color_mode(color_mode_override=ColorMode.NEVER, stream_isatty=True)


def test_force_color_enables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(color_mode_override=None, stream_isatty=False)


def test_force_color_zero_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORCE_COLOR", "0")
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stream_isatty=False)


def test_no_color_disables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "")
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stream_isatty=True)


def test_auto_follows_tty() -> None:
    assert resolve_color_mode(color_mode_override=ColorMode.AUTO, stream_isatty=True)
    assert not resolve_color_mode(color_mode_override=ColorMode.AUTO, stream_isatty=False)


def test_sink_isatty() -> None:
    assert sink_isatty(_Tty())
    assert not sink_isatty(io.BytesIO())
    assert not sink_isatty(object())


def test_sink_isatty_on_closed_stream() -> None:
    buffer = io.BytesIO()
    buffer.close()
    assert not sink_isatty(buffer)


def test_color_mode_values() -> None:
    assert ColorMode("always") is ColorMode.ALWAYS
