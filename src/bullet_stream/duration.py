# topmark:header:start
#
#   project      : bullet-stream
#   file         : duration.py
#   file_relpath : src/bullet_stream/duration.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable elapsed time."""

from __future__ import annotations


def human(seconds: float) -> str:
    """Format an elapsed duration for display.

    Examples:
        >>> human(0.05)
        '< 0.1s'
        >>> human(2.345)
        '2.3s'
        >>> human(75)
        '1m 15s'
        >>> human(3725)
        '1h 2m 5s'
    """
    millis_total = int(max(seconds, 0.0) * 1000)
    whole_seconds, millis = divmod(millis_total, 1000)
    hours = whole_seconds // 3600
    minutes = (whole_seconds // 60) % 60
    secs = whole_seconds % 60
    tenths = millis // 100

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    if secs > 0 or millis >= 100:
        return f"{secs}.{tenths}s"
    return "< 0.1s"
