# topmark:header:start
#
#   project      : bullet-stream
#   file         : color.py
#   file_relpath : src/bullet_stream/config/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-mode resolution for bullet-stream output.

This module decides whether ANSI escape codes should reach a sink:

- `ColorMode` enum (user intent, typically parsed from a `--color` flag by the
  calling tool).
- `resolve_color_mode()` combining that intent with the environment and TTY
  status of the destination.

[`Print.new`][bullet_stream.Print.new] accepts either a plain `bool` or a
`ColorMode`; the latter is resolved here against the sink it writes to.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from bullet_stream.config.logging import get_logger

logger = get_logger(__name__)


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when appropriate (typically when the sink is a TTY).
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def sink_isatty(sink: Any) -> bool:
    """Return True if ``sink`` reports being attached to a terminal.

    Sinks without an ``isatty`` method (in-memory buffers, custom writers) are
    treated as non-interactive.
    """
    isatty = getattr(sink, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    stream_isatty: bool,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **Explicit override**: `ALWAYS` → True; `NEVER` → False.
        2. **Environment**:
            - `FORCE_COLOR` (set and not equal to `"0"`) → True
            - `NO_COLOR` (set to any value) → False
        3. **Auto**: fall back to ``stream_isatty``.

    Args:
        color_mode_override (ColorMode | None): Requested mode; `None` behaves like `AUTO`.
        stream_isatty (bool): Whether the destination sink is a terminal.

    Returns:
        bool: True if ANSI color should be enabled; False otherwise.
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        logger.debug("FORCE_COLOR=%s enables color", force_color)
        return True
    if os.getenv("NO_COLOR") is not None:
        logger.debug("NO_COLOR disables color")
        return False

    return stream_isatty
