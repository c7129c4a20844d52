# topmark:header:start
#
#   project      : bullet-stream
#   file         : constants.py
#   file_relpath : src/bullet_stream/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""bullet-stream constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    BULLET_STREAM_VERSION: str = get_version("bullet-stream")
except PackageNotFoundError:  # running from a source checkout
    BULLET_STREAM_VERSION = "0.0.0"

# Line terminator; also the marker byte of line-mapped sinks.
NEWLINE: Final[bytes] = b"\n"

# Indentation applied to every non-blank line of streamed output.
CMD_INDENT: Final[str] = "      "

BULLET_FIRST_PREFIX: Final[str] = "- "
BULLET_REST_PREFIX: Final[str] = "  "
SUB_BULLET_FIRST_PREFIX: Final[str] = "  - "
SUB_BULLET_REST_PREFIX: Final[str] = "    "

# Seconds between two background timer ticks.
TIMER_TICK_INTERVAL: Final[float] = 1.0

# Written to a timer line whose guard was released without done/cancel.
TIMER_DROP_MARKER: Final[str] = "(Error)"
