# topmark:header:start
#
#   project      : bullet-stream
#   file         : __init__.py
#   file_relpath : src/bullet_stream/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient configuration for bullet-stream: logging and color-mode resolution."""

from __future__ import annotations

from bullet_stream.config.color import ColorMode, resolve_color_mode
from bullet_stream.config.logging import get_logger, setup_logging

__all__: list[str] = [
    "ColorMode",
    "resolve_color_mode",
    "get_logger",
    "setup_logging",
]
