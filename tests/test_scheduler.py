"""Unit tests for the scheduler backends.

HOW: ManualScheduler is tested directly against its virtual clock;
TkScheduler against a MagicMock widget; AsyncioScheduler on a real event
loop with short delays.
"""

import asyncio
from unittest.mock import MagicMock

from speedread.playback.controller import PlaybackController
from speedread.playback.scheduler import AsyncioScheduler, ManualScheduler, TkScheduler


class TestManualScheduler:
    """ManualScheduler fires timers on its virtual clock."""

    def test_fires_when_due(self):
        s = ManualScheduler()
        cb = MagicMock()
        s.schedule(100, cb)
        assert s.advance(99) == 0
        cb.assert_not_called()
        assert s.advance(1) == 1
        cb.assert_called_once_with()

    def test_cancelled_timer_never_fires(self):
        s = ManualScheduler()
        cb = MagicMock()
        handle = s.schedule(50, cb)
        s.cancel(handle)
        s.advance(1000)
        cb.assert_not_called()
        assert s.pending_count == 0

    def test_cancel_is_idempotent(self):
        s = ManualScheduler()
        handle = s.schedule(10, MagicMock())
        s.cancel(handle)
        s.cancel(handle)
        s.cancel(None)
        s.advance(10)
        handle2 = s.schedule(10, MagicMock())
        s.advance(10)
        s.cancel(handle2)  # already fired

    def test_fires_in_due_order(self):
        s = ManualScheduler()
        order = []
        s.schedule(30, lambda: order.append("c"))
        s.schedule(10, lambda: order.append("a"))
        s.schedule(20, lambda: order.append("b"))
        s.advance(100)
        assert order == ["a", "b", "c"]

    def test_ties_fire_in_scheduling_order(self):
        s = ManualScheduler()
        order = []
        s.schedule(10, lambda: order.append(1))
        s.schedule(10, lambda: order.append(2))
        s.advance(10)
        assert order == [1, 2]

    def test_chained_timer_within_window_fires(self):
        s = ManualScheduler()
        order = []

        def first():
            order.append(s.now_ms)
            s.schedule(40, lambda: order.append(s.now_ms))

        s.schedule(50, first)
        assert s.advance(100) == 2
        assert order == [50, 90]
        assert s.now_ms == 100

    def test_run_next_jumps_to_earliest(self):
        s = ManualScheduler()
        cb = MagicMock()
        s.schedule(250, cb)
        assert s.next_due_ms() == 250
        assert s.run_next() is True
        cb.assert_called_once_with()
        assert s.now_ms == 250
        assert s.run_next() is False
        assert s.next_due_ms() is None


class TestTkScheduler:
    """TkScheduler delegates to the widget's after and after_cancel."""

    def test_schedule_uses_after_with_whole_ms(self):
        widget = MagicMock()
        widget.after.return_value = "after#1"
        cb = MagicMock()
        handle = TkScheduler(widget).schedule(199.6, cb)
        widget.after.assert_called_once_with(200, cb)
        assert handle == "after#1"

    def test_cancel_uses_after_cancel(self):
        widget = MagicMock()
        TkScheduler(widget).cancel("after#1")
        widget.after_cancel.assert_called_once_with("after#1")

    def test_cancel_none_is_noop(self):
        widget = MagicMock()
        TkScheduler(widget).cancel(None)
        widget.after_cancel.assert_not_called()


class TestAsyncioScheduler:
    """AsyncioScheduler runs callbacks on the event loop."""

    def test_callback_fires(self):
        fired = []

        async def run():
            s = AsyncioScheduler()
            s.schedule(5, lambda: fired.append(True))
            await asyncio.sleep(0.05)

        asyncio.run(run())
        assert fired == [True]

    def test_cancelled_callback_does_not_fire(self):
        fired = []

        async def run():
            s = AsyncioScheduler()
            handle = s.schedule(5, lambda: fired.append(True))
            s.cancel(handle)
            await asyncio.sleep(0.05)

        asyncio.run(run())
        assert fired == []


class TestManualSchedulerQueueSize:
    """ManualScheduler.cancel() keeps cancelled timers from piling up."""

    def test_repeated_cancel_compacts_queue(self):
        s = ManualScheduler()
        for _ in range(500):
            s.cancel(s.schedule(200, MagicMock()))
        live = s.schedule(200, MagicMock())
        assert s.pending_count == 1
        assert len(s._heap) <= 2 * s.pending_count + 1
        s.cancel(live)
        assert s._heap == []

    def test_compaction_keeps_live_timers_in_order(self):
        s = ManualScheduler()
        order = []
        s.schedule(30, lambda: order.append("late"))
        s.schedule(10, lambda: order.append("early"))
        for _ in range(10):
            s.cancel(s.schedule(5, MagicMock()))
        s.advance(100)
        assert order == ["early", "late"]

    def test_toggling_without_time_passing_stays_bounded(self):
        s = ManualScheduler()
        c = PlaybackController(scheduler=s, text="a b c", wpm=300)
        for _ in range(1001):
            c.toggle()
        assert c.is_playing is True
        assert s.pending_count == 1
        assert len(s._heap) == 1
