# topmark:header:start
#
#   project      : bullet-stream
#   file         : strategies_bullet_stream.py
#   file_relpath : tests/strategies_bullet_stream.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for output byte streams and colorized text.

The byte strategies favor newline-heavy content so paragraph boundaries
(runs of two or more newlines) show up often, including at chunk edges.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from hypothesis import strategies as st

from bullet_stream.ansi import ANSI

Draw = Callable[[st.SearchStrategy[Any]], Any]

BLACKLIST_CATEGORIES: tuple[Literal["Cs"], ...] = ("Cs",)

# Printable text that never contains an escape character.
PLAIN_ALPHABET: st.SearchStrategy[str] = st.characters(
    blacklist_categories=BLACKLIST_CATEGORIES,
    blacklist_characters="\x1b",
    max_codepoint=0x024F,
)


def s_output_bytes(max_size: int = 64) -> st.SearchStrategy[bytes]:
    """Byte strings made of a few letters, spaces and many newlines."""
    atoms: st.SearchStrategy[bytes] = st.sampled_from([b"\n", b"\n\n", b"a", b"bc", b" ", b"\r"])
    return st.lists(atoms, max_size=max_size).map(b"".join)


@st.composite
def s_chunked(draw: Draw, data: bytes) -> list[bytes]:
    """Split ``data`` at random cut points (empty chunks allowed)."""
    cuts: list[int] = sorted(
        draw(st.lists(st.integers(min_value=0, max_value=len(data)), max_size=12))
    )
    chunks: list[bytes] = []
    start = 0
    for cut in cuts:
        chunks.append(data[start:cut])
        start = cut
    chunks.append(data[start:])
    return chunks


@st.composite
def s_output_and_chunks(draw: Draw) -> tuple[bytes, list[bytes]]:
    """A byte string together with one way of fragmenting it."""
    data: bytes = draw(s_output_bytes())
    chunks: list[bytes] = draw(s_chunked(data))
    return data, chunks


def s_plain_text(max_size: int = 60) -> st.SearchStrategy[str]:
    """Escape-free text with frequent newlines."""
    return st.text(alphabet=st.one_of(PLAIN_ALPHABET, st.just("\n")), max_size=max_size)


def s_colors(max_depth: int = 5) -> st.SearchStrategy[list[ANSI]]:
    """A stack of colors to apply, innermost first."""
    return st.lists(st.sampled_from(list(ANSI)), min_size=1, max_size=max_depth)
