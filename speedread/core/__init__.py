"""Pure pacing logic: data model, tokenizer, pivot calculator, delay model.

WHY: These pieces have no timers and no UI. Keeping them in one package
makes them trivially unit-testable and reusable by any view.

HOW: ir.py defines the records, tokenizer.py turns text into words,
pivot.py splits a word around its ORP character, delay.py decides how
long each word stays on screen.

RULES:
- Every function here is pure and total (no I/O, never raises for text input)
- Timing and state live in speedread.playback, not here
"""

from speedread.core.delay import DelayModel, compute_delay_ms
from speedread.core.ir import (
    DisplayState,
    PivotParts,
    PlaybackPhase,
    PlaybackState,
    WordSequence,
    WordToken,
)
from speedread.core.pivot import compute_parts, pivot_index
from speedread.core.tokenizer import count_words, tokenize

__all__ = [
    "DelayModel",
    "DisplayState",
    "PivotParts",
    "PlaybackPhase",
    "PlaybackState",
    "WordSequence",
    "WordToken",
    "compute_delay_ms",
    "compute_parts",
    "count_words",
    "pivot_index",
    "tokenize",
]
