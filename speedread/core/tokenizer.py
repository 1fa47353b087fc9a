"""Whitespace tokenizer for RSVP playback.

WHY: The reader flashes one word at a time, so raw pasted text (with line
breaks, tabs, and runs of spaces) must become a clean, ordered list of
words before anything can be paced or displayed.

HOW: ``str.split()`` with no separator trims the ends and splits on any
maximal run of Unicode whitespace; empty results are dropped as a guard.
Each word is wrapped in a WordToken carrying its ordinal position.

RULES:
- No token is empty or contains whitespace
- Punctuation stays attached to its word ("world." is one token)
- Same input always yields the same sequence; no locale-dependent behaviour
- Empty, whitespace-only, or None input yields an empty tuple
"""

from __future__ import annotations

from typing import Optional

from speedread.core.ir import WordSequence, WordToken


def tokenize(text: Optional[str]) -> WordSequence:
    """Split text into an ordered tuple of WordToken.

    Args:
        text: Raw input text. ``None`` is treated as empty.

    Returns:
        Tuple of WordToken with indices 0..n-1.
    """
    if not text:
        return ()
    words = [w for w in text.split() if w]
    return tuple(WordToken(text=w, index=i) for i, w in enumerate(words))


def count_words(text: Optional[str]) -> int:
    """Number of tokens ``tokenize`` would produce (editor word counter)."""
    if not text:
        return 0
    return len(text.split())
