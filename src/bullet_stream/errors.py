# topmark:header:start
#
#   project      : bullet-stream
#   file         : errors.py
#   file_relpath : src/bullet_stream/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Faults raised by bullet-stream.

Every exception defined here signals a broken invariant of the output
machinery (a closed sink, a misused handle, a corrupted global writer). They
are raised, never caught, by the package itself: once one of them fires the
visual consistency of the output can no longer be guaranteed.

Domain failures, such as a subprocess exiting with a non-zero status, are not
exceptions; see [`bullet_stream.command`][bullet_stream.command].
"""

from __future__ import annotations


class BulletStreamError(Exception):
    """Base class for all bullet-stream faults."""


class SinkClosedError(BulletStreamError):
    """Writing to or flushing the underlying sink failed (closed or broken)."""


class LockPoisonedError(BulletStreamError):
    """Shared state was left inconsistent by a failure while its lock was held."""


class ReentrancyError(BulletStreamError):
    """A scoped global-writer override was nested on the same thread."""


class LeakedHandleError(BulletStreamError):
    """A stream-multiplexer writer handle escaped the closure it was lent to."""


class GlobalWriterError(BulletStreamError):
    """The global writer was set to itself or changed behind a scoped override."""


class InvalidStateError(BulletStreamError):
    """An output operation is not valid in the handle's current state."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(f"'{operation}' is not a valid operation in the {state} state")
        self.operation = operation
        self.state = state


class ConsumedHandleError(BulletStreamError):
    """An output handle was used after a transition already consumed it."""
