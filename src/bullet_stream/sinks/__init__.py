# topmark:header:start
#
#   project      : bullet-stream
#   file         : __init__.py
#   file_relpath : src/bullet_stream/sinks/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Byte sinks composed beneath the output state machine.

- [`ParagraphInspectWrite`][bullet_stream.sinks.paragraph.ParagraphInspectWrite]:
  tracks trailing newlines to avoid duplicate blank lines.
- [`MappedWrite`][bullet_stream.sinks.mapped.MappedWrite]: buffers records and
  transforms them, used to indent streamed output.
- [`AnsiStripWrite`][bullet_stream.sinks.strip.AnsiStripWrite]: removes color
  when color output is disabled.
"""

from __future__ import annotations

from bullet_stream.sinks.api import ByteSink, TrailingParagraphSink
from bullet_stream.sinks.mapped import (
    MappedWrite,
    format_stream_writer,
    indent_line,
    line_mapped,
    mapped,
)
from bullet_stream.sinks.paragraph import ParagraphInspectWrite
from bullet_stream.sinks.strip import AnsiStripWrite

__all__: list[str] = [
    "AnsiStripWrite",
    "ByteSink",
    "MappedWrite",
    "ParagraphInspectWrite",
    "TrailingParagraphSink",
    "format_stream_writer",
    "indent_line",
    "line_mapped",
    "mapped",
]
