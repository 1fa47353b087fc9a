"""Timed playback: the controller state machine and its timer backends.

WHY: Everything that depends on time lives here, separate from the pure
pacing rules in speedread.core.

HOW: controller.py holds the PlaybackController; scheduler.py provides
the cancellable one-shot timers it runs on (manual, Tk, asyncio).
"""

from speedread.playback.controller import PlaybackController
from speedread.playback.scheduler import (
    AsyncioScheduler,
    BaseScheduler,
    ManualScheduler,
    TkScheduler,
)

__all__ = [
    "AsyncioScheduler",
    "BaseScheduler",
    "ManualScheduler",
    "PlaybackController",
    "TkScheduler",
]
