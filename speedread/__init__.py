"""SpeedRead — RSVP speed reading with an Optimal Recognition Point.

WHY: Reading one word at a time at a fixed screen position removes eye
movement across the page. This package provides the pacing engine that
makes that work (tokenizing, pivot placement, adaptive per-word delays,
and a play/pause/seek state machine) plus a small desktop reader on top.

HOW: Two layers:
  core      — pure functions and records (tokenize, compute_parts,
              compute_delay_ms)
  playback  — PlaybackController driven by a pluggable scheduler
The Tkinter GUI (speedread.gui) is only a view: it renders DisplayState
snapshots and calls controller operations.

RULES:
- The engine has no UI, file, or network dependencies
- Views never re-derive pivots or timing; they read DisplayState
"""

__version__ = "0.1.0"
