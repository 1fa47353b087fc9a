"""Optimal Recognition Point (ORP) pivot calculator.

WHY: RSVP keeps the eye still by always drawing the word so its pivot
character lands on the same screen position. The view needs the word split
into the text left of the pivot, the pivot itself, and the text to its right.

HOW: ``pivot_index = ceil((len - 1) / 2)``, which is the exact center for
odd-length words and the right-of-center of the two middle characters for
even-length words. Lengths are counted in code points, so multi-byte
characters are never split.

RULES:
- left + pivot + right == word (lossless, order preserved)
- A 1-character word is all pivot; an empty word is all empty parts
- The source word is never modified
"""

from __future__ import annotations

from typing import Union

from speedread.core.ir import PivotParts, WordToken


def _text_of(word: Union[WordToken, str, None]) -> str:
    if word is None:
        return ""
    if isinstance(word, WordToken):
        return word.text
    return word


def pivot_index(word: Union[WordToken, str, None]) -> int:
    """Index of the pivot character, or -1 for an empty word."""
    length = len(_text_of(word))
    if length == 0:
        return -1
    # ceil((length - 1) / 2) without floats
    return length // 2


def compute_parts(word: Union[WordToken, str, None]) -> PivotParts:
    """Partition a word into left / pivot / right for ORP display.

    Args:
        word: A WordToken or plain string. Empty or None gives empty parts.

    Returns:
        PivotParts whose concatenation equals the word.
    """
    text = _text_of(word)
    if not text:
        return PivotParts()
    p = pivot_index(text)
    return PivotParts(left=text[:p], pivot=text[p], right=text[p + 1:])
