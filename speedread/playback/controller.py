"""RSVP playback controller — the state machine behind the reader.

WHY: Playback has real timing hazards: a timer that fires after a pause,
two timers advancing the same word twice, an old text's timer advancing
the new text. Putting all state and the single pending advance in one
explicit object makes those hazards impossible and keeps the logic
testable without any UI.

HOW: The controller owns the word sequence, a PlaybackState, the current
rate, and at most one pending advance (a scheduler handle plus a
generation token). Each operation mutates state synchronously, cancels
the pending advance when required, reschedules explicitly when entering
or continuing Playing, and then emits a DisplayState to subscribers.

States:
  idle     — not playing (any index)
  playing  — exactly one advance pending
  finished — stopped on the last word by natural completion

RULES:
- At most one advance is pending at any time
- Any operation that stops playback or moves the index directly cancels
  the pending advance; a stale advance (old token) is ignored if it fires
- play() on an empty sequence is a no-op; play() while playing is a no-op
- play() at or past the last word restarts from index 0
- An advance on the last word stops there (finished); it never moves past
- seek() clamps into [0, total_words - 1] and always pauses
- set_rate() clamps into [MIN_WPM, MAX_WPM] and never touches a pending advance
- Subscribers get a DisplayState after every mutation; a failing
  subscriber is logged and does not affect playback
- No operation raises for any input within its domain
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from speedread.config import DEFAULT_WPM, clamp_wpm
from speedread.core.delay import DEFAULT_DELAY_MODEL, DelayModel
from speedread.core.ir import (
    DisplayState,
    PlaybackPhase,
    PlaybackState,
    WordSequence,
    WordToken,
)
from speedread.core.pivot import compute_parts
from speedread.core.tokenizer import tokenize
from speedread.playback.scheduler import BaseScheduler, ManualScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[DisplayState], None]


class PlaybackController:
    """Drives an index through a word sequence at a target reading rate.

    Args:
        scheduler: Timer backend. Defaults to a ManualScheduler, which only
            advances when driven explicitly.
        text: Initial text to load.
        wpm: Initial rate, clamped into the supported range.
        delay_model: Rules for per-word display duration.
    """

    def __init__(
        self,
        scheduler: Optional[BaseScheduler] = None,
        text: str = "",
        wpm: float = DEFAULT_WPM,
        delay_model: DelayModel = DEFAULT_DELAY_MODEL,
    ) -> None:
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._delay_model = delay_model
        self._wpm = clamp_wpm(wpm)
        self._words: WordSequence = tokenize(text)
        self._state = PlaybackState()
        self._finished = False

        # Pending advance: scheduler handle + the token it was stamped with
        self._pending: Any = None
        self._pending_token: Optional[int] = None
        self._generation = 0

        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def words(self) -> WordSequence:
        return self._words

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def wpm(self) -> int:
        return self._wpm

    @property
    def has_pending_advance(self) -> bool:
        return self._pending_token is not None

    @property
    def current_word(self) -> Optional[WordToken]:
        if not self._words:
            return None
        return self._words[self._state.current_index]

    @property
    def phase(self) -> PlaybackPhase:
        if self._state.is_playing:
            return PlaybackPhase.PLAYING
        if self._finished:
            return PlaybackPhase.FINISHED
        return PlaybackPhase.IDLE

    @property
    def state(self) -> DisplayState:
        """Snapshot of everything a view needs to draw the current frame."""
        total = len(self._words)
        index = self._state.current_index
        word = self.current_word
        text = word.text if word is not None else ""
        next_word = self._words[index + 1].text if index + 1 < total else None
        progress = int(round(index / total * 100)) if total else 0
        return DisplayState(
            current_word=text,
            parts=compute_parts(text),
            current_index=index,
            total_words=total,
            is_playing=self._state.is_playing,
            phase=self.phase,
            wpm=self._wpm,
            next_word=next_word,
            progress_pct=progress,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for DisplayState updates.

        Returns:
            A callable that removes the listener. Calling it twice is safe.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load_text(self, text: Optional[str]) -> None:
        """Replace the word sequence and reset to index 0, paused."""
        self._cancel_pending()
        self._words = tokenize(text)
        self._state = PlaybackState()
        self._finished = False
        logger.info("Loaded text with %d words", len(self._words))
        self._emit()

    def play(self) -> None:
        if not self._words:
            logger.debug("play() ignored: nothing to play")
            return
        if self._state.is_playing:
            return
        if self._state.current_index >= len(self._words) - 1:
            self._state.current_index = 0
        self._state.is_playing = True
        self._finished = False
        self._schedule_advance()
        self._emit()

    def pause(self) -> None:
        self._cancel_pending()
        if not self._state.is_playing:
            return
        self._state.is_playing = False
        logger.debug("Paused at word %d", self._state.current_index)
        self._emit()

    def toggle(self) -> None:
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, index: int) -> None:
        """Jump to ``index`` (clamped) and pause."""
        self._cancel_pending()
        last = max(len(self._words) - 1, 0)
        try:
            target = int(index)
        except (TypeError, ValueError, OverflowError):
            logger.debug("seek() got non-integer %r, staying put", index)
            target = self._state.current_index
        self._state.current_index = min(max(target, 0), last)
        self._state.is_playing = False
        self._finished = False
        self._emit()

    def reset(self) -> None:
        self._cancel_pending()
        self._state = PlaybackState()
        self._finished = False
        self._emit()

    def set_rate(self, wpm: float) -> None:
        """Store a new rate (clamped); it applies from the next scheduled advance."""
        if wpm != wpm:  # NaN
            logger.debug("set_rate() got NaN, keeping %d", self._wpm)
            return
        try:
            new_wpm = clamp_wpm(wpm)
        except TypeError:
            logger.debug("set_rate() got non-numeric %r, keeping %d", wpm, self._wpm)
            return
        if new_wpm == self._wpm:
            return
        self._wpm = new_wpm
        self._emit()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule_advance(self) -> None:
        """Arm the single pending advance for the current word."""
        self._cancel_pending()
        word = self._words[self._state.current_index]
        delay = self._delay_model.delay_ms(word, self._wpm)
        self._generation += 1
        token = self._generation
        self._pending_token = token
        self._pending = self._scheduler.schedule(delay, lambda: self._on_advance(token))
        logger.debug(
            "Scheduled advance from word %d (%r) in %.1f ms",
            self._state.current_index, word.text, delay,
        )

    def _cancel_pending(self) -> None:
        if self._pending_token is None:
            return
        handle = self._pending
        self._pending = None
        self._pending_token = None
        self._scheduler.cancel(handle)

    def _on_advance(self, token: int) -> None:
        if token != self._pending_token or not self._state.is_playing:
            logger.debug("Ignored stale advance (token %d)", token)
            return
        self._pending = None
        self._pending_token = None

        if self._state.current_index + 1 >= len(self._words):
            self._state.is_playing = False
            self._finished = True
            logger.info("Finished on word %d of %d", self._state.current_index + 1, len(self._words))
        else:
            self._state.current_index += 1
            self._schedule_advance()
        self._emit()

    def _emit(self) -> None:
        if not self._listeners:
            return
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Display listener %r failed", listener)
