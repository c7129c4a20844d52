# topmark:header:start
#
#   project      : bullet-stream
#   file         : __init__.py
#   file_relpath : src/bullet_stream/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""bullet-stream package.

bullet-stream writes structured, hierarchical progress output for
long-running command-line tools: headers, bullets and sub-bullets, colored
announcements, indented subprocess output and background timers. The
[`Print`][bullet_stream.output.Print] state machine makes it hard to produce
output in the wrong order.
"""

from __future__ import annotations

from bullet_stream import global_writer, style
from bullet_stream.ansi import ANSI, strip_ansi, wrap_ansi_escape_each_line
from bullet_stream.command import CommandError, CommandOutcome, CommandOutput
from bullet_stream.config.color import ColorMode
from bullet_stream.constants import BULLET_STREAM_VERSION
from bullet_stream.errors import (
    BulletStreamError,
    ConsumedHandleError,
    GlobalWriterError,
    InvalidStateError,
    LeakedHandleError,
    LockPoisonedError,
    ReentrancyError,
    SinkClosedError,
)
from bullet_stream.global_writer import GlobalWriter, locked_writer, set_writer, with_locked_writer
from bullet_stream.output import Background, Bullet, Header, Print, Stream, SubBullet

__version__: str = BULLET_STREAM_VERSION

__all__: list[str] = [
    "ANSI",
    "Background",
    "Bullet",
    "BulletStreamError",
    "ColorMode",
    "CommandError",
    "CommandOutcome",
    "CommandOutput",
    "ConsumedHandleError",
    "GlobalWriter",
    "GlobalWriterError",
    "Header",
    "InvalidStateError",
    "LeakedHandleError",
    "LockPoisonedError",
    "Print",
    "ReentrancyError",
    "SinkClosedError",
    "Stream",
    "SubBullet",
    "global_writer",
    "locked_writer",
    "set_writer",
    "strip_ansi",
    "style",
    "with_locked_writer",
    "wrap_ansi_escape_each_line",
]
