"""Data model dataclasses shared by the pacing engine and its views.

WHY: The tokenizer, pivot calculator, delay model, and playback controller
all pass words and display snapshots between each other. A small set of
well-typed, immutable records keeps that contract explicit and lets the
view layer render without re-deriving any logic.

HOW: Frozen dataclasses form the model:
  WordToken     — one whitespace-delimited word plus its ordinal position
  PivotParts    — left / pivot / right partition of a word for ORP display
  PlaybackState — the controller's mutable core (index + running flag)
  PlaybackPhase — idle / playing / finished
  DisplayState  — everything a view needs to draw one frame

RULES:
- WordToken and PivotParts are immutable; a text load produces new tokens
- A word sequence is a tuple of WordToken (replaced wholesale, never mutated)
- DisplayState is a snapshot; the controller emits a fresh one per mutation
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class WordToken:
    """A single word as produced by the tokenizer.

    RULES:
    - text: non-empty, contains no whitespace
    - index: 0-based position in the word sequence it belongs to
    """

    text: str
    index: int

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text


WordSequence = Tuple[WordToken, ...]


@dataclass(frozen=True)
class PivotParts:
    """The ORP partition of one word: ``left + pivot + right == word``."""

    left: str = ""
    pivot: str = ""
    right: str = ""

    @property
    def text(self) -> str:
        return self.left + self.pivot + self.right


@dataclass
class PlaybackState:
    """Position and running flag owned by the playback controller.

    RULES:
    - current_index is within [0, max(total_words - 1, 0)] whenever observed
    - is_playing is True only while an advance is pending
    """

    current_index: int = 0
    is_playing: bool = False


class PlaybackPhase(str, enum.Enum):
    """The three observable states of the playback state machine.

    HOW: Inherits from str so values print and compare as plain strings.

    RULES:
    - idle: paused anywhere in the sequence (including index 0)
    - playing: an advance is scheduled
    - finished: stopped on the last word by natural completion
    """

    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class DisplayState:
    """One renderable frame emitted by the playback controller.

    WHY: The view should never compute pivots, progress, or the next-word
    preview itself. Everything it draws comes from this snapshot.

    RULES:
    - current_word is "" for an empty sequence
    - next_word is None on the last word or for an empty sequence
    - progress_pct is round(current_index / total_words * 100), 0 when empty
    """

    current_word: str
    parts: PivotParts
    current_index: int
    total_words: int
    is_playing: bool
    phase: PlaybackPhase
    wpm: int
    next_word: Optional[str] = None
    progress_pct: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_words == 0
