"""Shared test fixtures for the speedread test suite.

WHY: Most playback tests need the same pieces: a deterministic scheduler,
a controller wired to it, and a listener that records every emitted
DisplayState.

HOW: ManualScheduler replaces real timers, so tests move time explicitly
with ``scheduler.advance(ms)`` and never sleep.

RULES:
- Every test gets fresh instances (no shared mutable state)
- HELLO_WORLD is the worked example: "Hello" 200 ms, "world." 300 ms at 300 WPM
"""

from typing import List

import pytest

from speedread.core.ir import DisplayState
from speedread.playback.controller import PlaybackController
from speedread.playback.scheduler import ManualScheduler

HELLO_WORLD = "Hello world."

# Five plain words, 200 ms each at 300 WPM
FIVE_WORDS = "one two three four five"


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(scheduler) -> PlaybackController:
    """Controller on FIVE_WORDS at 300 WPM."""
    return PlaybackController(scheduler=scheduler, text=FIVE_WORDS, wpm=300)


@pytest.fixture
def recorded(controller) -> List[DisplayState]:
    """Every DisplayState the controller emits from now on."""
    states: List[DisplayState] = []
    controller.subscribe(states.append)
    return states
