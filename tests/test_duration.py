# topmark:header:start
#
#   project      : bullet-stream
#   file         : test_duration.py
#   file_relpath : tests/test_duration.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Humanized elapsed time."""

from __future__ import annotations

from bullet_stream.duration import human
from tests.conftest import normalize_durations, parametrize


@parametrize(
    "seconds, expected",
    [
        (0.0, "< 0.1s"),
        (0.099, "< 0.1s"),
        (0.1, "0.1s"),
        (1.0, "1.0s"),
        (2.345, "2.3s"),
        (59.99, "59.9s"),
        (60.0, "1m 0s"),
        (75.4, "1m 15s"),
        (3599.0, "59m 59s"),
        (3600.0, "1h 0m 0s"),
        (3725.0, "1h 2m 5s"),
        (-3.0, "< 0.1s"),
    ],
)
def test_human(seconds: float, expected: str) -> None:
    assert human(seconds) == expected


@parametrize("seconds", [0.0, 0.5, 12.3, 75.0, 4000.0])
def test_normalizer_recognizes_every_format(seconds: float) -> None:
    assert normalize_durations(f"({human(seconds)})") == "(<elapsed>)"
