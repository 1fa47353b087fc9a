"""Configuration constants, pacing rules, and .env loading.

WHY: Centralizes every tunable value of the reader (rate bounds, delay
multipliers, font sizes, theme) so both humans and coding agents can find
and change them without digging through the engine or the GUI.

HOW: python-dotenv loads the .env file on import. Constants are defined as
module-level values. A few defaults can be overridden through environment
variables; invalid overrides raise ValueError immediately.

RULES:
- Rate bounds are fixed at [60, 1500] WPM; only the default is overridable
- DEFAULT_WPM is clamped into the supported range
- PAUSE_PUNCTUATION lists the trailing characters that lengthen a word's delay
- All overrides use the SPEEDREAD_ prefix
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer override from the environment.

    RULES:
    - Missing or blank values return ``default``
    - Non-integer values raise ValueError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}. "
            "Fix or remove it in the .env file.".format(name, raw)
        ) from None


# ---------------------------------------------------------------------------
# Reading rate
# ---------------------------------------------------------------------------

MIN_WPM = 60
MAX_WPM = 1500
WPM_STEP = 10
"""Granularity of the GUI rate slider."""


def clamp_wpm(value: float) -> int:
    """Clamp a requested rate into [MIN_WPM, MAX_WPM] as an integer.

    WHY: The rate is user-controlled (slider, keyboard) and must never
    produce a zero, negative, or absurd per-word delay.

    HOW: Rounds to the nearest integer, then clamps.

    RULES:
    - Never raises for any finite number
    - NaN falls back to MIN_WPM
    """
    if value != value:  # NaN
        return MIN_WPM
    if value >= MAX_WPM:
        return MAX_WPM
    if value <= MIN_WPM:
        return MIN_WPM
    return int(round(value))


DEFAULT_WPM = clamp_wpm(_env_int("SPEEDREAD_DEFAULT_WPM", 300))

# ---------------------------------------------------------------------------
# Delay model
# ---------------------------------------------------------------------------

MS_PER_MINUTE = 60000.0

PAUSE_PUNCTUATION: frozenset = frozenset({".", ",", ";", "!", "?"})
"""Trailing characters that mark a clause or sentence boundary."""

PUNCTUATION_MULTIPLIER = 1.5
LONG_WORD_THRESHOLD = 10
"""Words strictly longer than this many characters are 'long'."""
LONG_WORD_MULTIPLIER = 1.2

# ---------------------------------------------------------------------------
# View defaults
# ---------------------------------------------------------------------------

MIN_FONT_SIZE = 16
MAX_FONT_SIZE = 96
FONT_SIZE_STEP = 4
DEFAULT_FONT_SIZE = min(
    MAX_FONT_SIZE, max(MIN_FONT_SIZE, _env_int("SPEEDREAD_FONT_SIZE", 24))
)
DEFAULT_DARK_MODE = os.getenv("SPEEDREAD_DARK_MODE", "true").strip().lower() == "true"

LOG_LEVEL = os.getenv("SPEEDREAD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

SAMPLE_TEXT = (
    "Welcome to SpeedRead! \n\n"
    "Paste your own text here to get started. \n\n"
    "Speed reading tools like this one let you read faster by removing the "
    "need for your eyes to move across the page (saccadic movements). \n\n"
    "Instead, the words are flashed in the same position, centered on the "
    "'Optimal Recognition Point', usually the middle character, highlighted "
    "in red. \n\n"
    "Try adjusting the Words Per Minute (WPM) slider below. Most people can "
    "comfortably read at 400-600 WPM with a little practice. \n\n"
    "Ready? Press Play!"
)
