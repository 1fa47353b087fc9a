"""Cancellable one-shot timers for the playback controller.

WHY: The controller needs exactly one thing from its environment: "call
this function once after N milliseconds, unless I cancel it first". Tk,
asyncio, and tests all provide that differently. A small scheduler
interface keeps the controller free of any event-loop specifics.

HOW: BaseScheduler is an ABC with ``schedule()`` returning an opaque handle
and ``cancel()`` taking that handle back. Three implementations:
  ManualScheduler  — virtual millisecond clock, driven explicitly (tests,
                     headless use)
  TkScheduler      — tkinter ``after`` / ``after_cancel``
  AsyncioScheduler — ``loop.call_later`` / ``TimerHandle.cancel``

RULES:
- A cancelled handle never fires
- cancel() accepts None and already-fired or already-cancelled handles
- Callbacks take no arguments
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class BaseScheduler(ABC):
    """Abstract one-shot timer source.

    To add a new backend:
    1. Subclass BaseScheduler
    2. Implement schedule() and cancel()
    3. Pass an instance to PlaybackController
    """

    @abstractmethod
    def schedule(self, delay_ms: float, callback: Callback) -> Any:
        """Arrange for ``callback()`` to run once after ``delay_ms``.

        Returns:
            An opaque handle accepted by cancel().
        """

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Prevent a scheduled callback from running. Idempotent."""


# ---------------------------------------------------------------------------
# Manual (virtual clock)
# ---------------------------------------------------------------------------


@dataclass(order=True)
class _ManualTimer:
    due_ms: float
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)


class ManualScheduler(BaseScheduler):
    """Deterministic scheduler with a virtual clock.

    WHY: Playback tests must not sleep. This backend lets a test say
    "300 ms pass" and observe exactly which advances fire.

    HOW: Timers live in a heap ordered by due time, then insertion order.
    ``advance(ms)`` moves the clock forward, firing every due timer in
    order; a callback that schedules another timer within the window sees
    it fire in the same call.

    RULES:
    - Time only moves through advance() and run_next()
    - Ties fire in scheduling order
    """

    def __init__(self) -> None:
        self._now_ms = 0.0
        self._heap: List[_ManualTimer] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self._heap if not t.cancelled and not t.fired)

    def next_due_ms(self) -> Optional[float]:
        """Due time of the earliest live timer, or None."""
        self._drop_dead()
        return self._heap[0].due_ms if self._heap else None

    def schedule(self, delay_ms: float, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(
            due_ms=self._now_ms + max(0.0, float(delay_ms)),
            seq=next(self._seq),
            callback=callback,
        )
        heapq.heappush(self._heap, timer)
        return timer

    def cancel(self, handle: Any) -> None:
        if not isinstance(handle, _ManualTimer):
            return
        handle.cancelled = True
        # Rebuild once dead timers outnumber live ones
        if len(self._heap) > 2 * self.pending_count:
            self._heap = [t for t in self._heap if not t.cancelled]
            heapq.heapify(self._heap)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms``, firing due timers.

        Returns:
            Number of callbacks fired.
        """
        target = self._now_ms + ms
        fired = 0
        while True:
            self._drop_dead()
            if not self._heap or self._heap[0].due_ms > target:
                break
            timer = heapq.heappop(self._heap)
            self._now_ms = timer.due_ms
            timer.fired = True
            timer.callback()
            fired += 1
        self._now_ms = target
        return fired

    def run_next(self) -> bool:
        """Jump to and fire the earliest live timer. False if none pending."""
        due = self.next_due_ms()
        if due is None:
            return False
        self.advance(due - self._now_ms)
        return True

    def _drop_dead(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)


# ---------------------------------------------------------------------------
# Tkinter
# ---------------------------------------------------------------------------


class TkScheduler(BaseScheduler):
    """Schedules on the Tk main loop through any widget's ``after``.

    RULES:
    - Must be used from the Tk main thread only
    - Delays are rounded to whole milliseconds (Tk's resolution)
    """

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def schedule(self, delay_ms: float, callback: Callback) -> str:
        return self._widget.after(max(0, int(round(delay_ms))), callback)

    def cancel(self, handle: Any) -> None:
        if handle is None:
            return
        try:
            self._widget.after_cancel(handle)
        except ValueError:
            # Tk rejects ids it no longer knows about
            logger.debug("after_cancel ignored unknown id %r", handle)


# ---------------------------------------------------------------------------
# asyncio
# ---------------------------------------------------------------------------


class AsyncioScheduler(BaseScheduler):
    """Schedules on an asyncio event loop with ``call_later``.

    HOW: The loop is resolved lazily so the scheduler can be built before
    the loop starts running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay_ms: float, callback: Callback) -> asyncio.TimerHandle:
        return self._get_loop().call_later(max(0.0, delay_ms) / 1000.0, callback)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()
