"""Tkinter desktop reader for SpeedRead.

WHY: The pacing engine needs a face: somewhere to paste text, a fixed
stage where words flash with their pivot character highlighted, and
controls for rate, position, font size, and theme.

HOW: A single SpeedReaderApp builds two views inside one window:
EDITOR (text box + word count + Start Reading) and READER (stage, next
word preview, progress slider, reset / play buttons, WPM slider, font
size buttons). The PlaybackController runs on a TkScheduler, so every
advance fires on the Tk main loop. The app subscribes to DisplayState
snapshots and only copies their fields into widgets.

RULES:
- Widgets are only touched from the Tk main thread
- The view never computes pivots, delays, or progress itself
- Editing the text reloads the controller (index 0, paused)
- Switching to the editor pauses playback
- Space bar toggles play/pause only in reader mode; buttons never take focus
- Play is disabled while there are no words
- Font size stays within [MIN_FONT_SIZE, MAX_FONT_SIZE]
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional

from speedread.config import (
    DEFAULT_DARK_MODE,
    DEFAULT_FONT_SIZE,
    DEFAULT_WPM,
    FONT_SIZE_STEP,
    LOG_LEVEL,
    MAX_FONT_SIZE,
    MAX_WPM,
    MIN_FONT_SIZE,
    MIN_WPM,
    SAMPLE_TEXT,
    WPM_STEP,
)
from speedread.core.ir import DisplayState
from speedread.core.tokenizer import count_words
from speedread.playback.controller import PlaybackController
from speedread.playback.scheduler import TkScheduler

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_WINDOW_TITLE = "SpeedRead"
_WINDOW_MIN_WIDTH = 640
_WINDOW_MIN_HEIGHT = 480
_PAD = 8
_FONT_FAMILY = "Courier"

_THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "bg": "#0f172a",
        "stage": "#1e293b",
        "fg": "#f1f5f9",
        "muted": "#64748b",
        "pivot": "#ef4444",
    },
    "light": {
        "bg": "#f9fafb",
        "stage": "#ffffff",
        "fg": "#111827",
        "muted": "#9ca3af",
        "pivot": "#dc2626",
    },
}


def clamp_font_size(size: int) -> int:
    return min(MAX_FONT_SIZE, max(MIN_FONT_SIZE, size))


def snap_wpm(value: float) -> int:
    """Round a slider position to the nearest WPM_STEP."""
    return int(round(float(value) / WPM_STEP)) * WPM_STEP


class SpeedReaderApp:
    """Main tkinter application.

    HOW: Builds the header, the editor frame, and the reader frame; only
    one of the two frames is packed at a time. ``_render`` is the single
    DisplayState listener and updates every reader widget.
    """

    def __init__(self, root: tk.Tk, text: str = SAMPLE_TEXT) -> None:
        self._root = root
        self._root.title(_WINDOW_TITLE)
        self._root.minsize(_WINDOW_MIN_WIDTH, _WINDOW_MIN_HEIGHT)

        self._dark_mode = DEFAULT_DARK_MODE
        self._font_size = clamp_font_size(DEFAULT_FONT_SIZE)
        self._show_input = True
        # Set while _render moves the progress slider so it isn't read as a seek
        self._rendering = False

        self._controller = PlaybackController(
            scheduler=TkScheduler(root), text=text, wpm=DEFAULT_WPM
        )

        self._build_ui(text)
        self._controller.subscribe(self._render)
        self._root.bind("<space>", self._on_space)

        self._apply_theme()
        self._show_editor()
        self._render(self._controller.state)

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self, text: str) -> None:
        """Build the main window layout."""
        self._main = tk.Frame(self._root, padx=_PAD, pady=_PAD)
        self._main.pack(fill=tk.BOTH, expand=True)

        # --- Header ---
        # Buttons never take keyboard focus so the space bar only reaches _on_space
        header = tk.Frame(self._main)
        header.pack(fill=tk.X, pady=(0, _PAD))
        self._title_label = tk.Label(header, text="SpeedRead", font=(_FONT_FAMILY, 16, "bold"))
        self._title_label.pack(side=tk.LEFT)
        self._theme_btn = ttk.Button(header, text="Theme", takefocus=False, command=self._toggle_theme)
        self._theme_btn.pack(side=tk.RIGHT)
        self._reader_tab = ttk.Button(header, text="Reader", takefocus=False, command=self._show_reader)
        self._reader_tab.pack(side=tk.RIGHT, padx=(0, _PAD))
        self._editor_tab = ttk.Button(header, text="Editor", takefocus=False, command=self._show_editor)
        self._editor_tab.pack(side=tk.RIGHT, padx=(0, 4))

        # --- Editor ---
        self._editor = tk.Frame(self._main)
        self._text_box = tk.Text(self._editor, wrap=tk.WORD, height=14, undo=False)
        self._text_box.insert("1.0", text)
        self._text_box.pack(fill=tk.BOTH, expand=True)
        self._text_box.bind("<<Modified>>", self._on_text_modified)
        self._text_box.edit_modified(False)

        editor_footer = tk.Frame(self._editor)
        editor_footer.pack(fill=tk.X, pady=(_PAD, 0))
        self._word_count_label = tk.Label(editor_footer, text="")
        self._word_count_label.pack(side=tk.LEFT)
        ttk.Button(
            editor_footer, text="Start Reading", takefocus=False, command=self._show_reader
        ).pack(side=tk.RIGHT)

        # --- Reader ---
        self._reader = tk.Frame(self._main)

        self._stage = tk.Frame(self._reader, height=180)
        self._stage.pack(fill=tk.X, pady=(0, _PAD))
        self._stage.pack_propagate(False)
        # Left half is right-aligned, right half left-aligned, pivot sits between
        self._stage.columnconfigure(0, weight=1, uniform="half")
        self._stage.columnconfigure(2, weight=1, uniform="half")
        self._stage.rowconfigure(0, weight=1)
        self._left_label = tk.Label(self._stage, anchor=tk.E)
        self._pivot_label = tk.Label(self._stage)
        self._right_label = tk.Label(self._stage, anchor=tk.W)
        self._left_label.grid(row=0, column=0, sticky="nse")
        self._pivot_label.grid(row=0, column=1)
        self._right_label.grid(row=0, column=2, sticky="nsw")
        self._next_label = tk.Label(self._stage, font=(_FONT_FAMILY, 10))
        self._next_label.grid(row=1, column=0, columnspan=3, pady=(0, _PAD))

        # Progress
        progress_row = tk.Frame(self._reader)
        progress_row.pack(fill=tk.X)
        self._progress_label = tk.Label(progress_row, text="")
        self._progress_label.pack(side=tk.LEFT)
        self._pct_label = tk.Label(progress_row, text="")
        self._pct_label.pack(side=tk.RIGHT)
        self._progress_scale = ttk.Scale(
            self._reader,
            from_=0,
            to=0,
            orient=tk.HORIZONTAL,
            command=self._on_progress_slide,
        )
        self._progress_scale.pack(fill=tk.X, pady=(0, _PAD))

        # Controls
        controls = tk.Frame(self._reader)
        controls.pack(fill=tk.X)
        ttk.Button(controls, text="Reset", takefocus=False, command=self._controller.reset).pack(side=tk.LEFT)
        self._play_btn = ttk.Button(controls, text="Play", takefocus=False, command=self._controller.toggle)
        self._play_btn.pack(side=tk.LEFT, padx=(4, 16))

        speed = tk.Frame(controls)
        speed.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self._wpm_label = tk.Label(speed, text="")
        self._wpm_label.pack(anchor=tk.W)
        self._wpm_scale = ttk.Scale(
            speed,
            from_=MIN_WPM,
            to=MAX_WPM,
            orient=tk.HORIZONTAL,
            command=self._on_wpm_slide,
        )
        self._wpm_scale.set(DEFAULT_WPM)
        self._wpm_scale.pack(fill=tk.X)

        size = tk.Frame(controls)
        size.pack(side=tk.RIGHT, padx=(16, 0))
        self._size_title = tk.Label(size, text="Size")
        self._size_title.pack(side=tk.LEFT)
        ttk.Button(size, text="-", width=2, takefocus=False, command=lambda: self._change_font(-FONT_SIZE_STEP)).pack(side=tk.LEFT)
        self._size_label = tk.Label(size, text=str(self._font_size), width=3)
        self._size_label.pack(side=tk.LEFT)
        ttk.Button(size, text="+", width=2, takefocus=False, command=lambda: self._change_font(FONT_SIZE_STEP)).pack(side=tk.LEFT)

    # ------------------------------------------------------------------
    # View switching
    # ------------------------------------------------------------------

    def _show_editor(self) -> None:
        self._controller.pause()
        self._show_input = True
        self._reader.pack_forget()
        self._editor.pack(fill=tk.BOTH, expand=True)
        self._update_word_count()

    def _show_reader(self) -> None:
        self._show_input = False
        self._editor.pack_forget()
        self._reader.pack(fill=tk.BOTH, expand=True)
        self._root.focus_set()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_space(self, event: tk.Event) -> Optional[str]:
        if self._show_input:
            return None
        self._controller.toggle()
        return "break"

    def _on_text_modified(self, event: tk.Event) -> None:
        if not self._text_box.edit_modified():
            return
        self._text_box.edit_modified(False)
        self._controller.load_text(self._text_box.get("1.0", "end-1c"))
        self._update_word_count()

    def _on_progress_slide(self, value: str) -> None:
        if self._rendering:
            return
        self._controller.seek(int(round(float(value))))

    def _on_wpm_slide(self, value: str) -> None:
        self._controller.set_rate(snap_wpm(value))
        self._wpm_label.configure(text="Speed: {} WPM".format(self._controller.wpm))

    def _change_font(self, delta: int) -> None:
        self._font_size = clamp_font_size(self._font_size + delta)
        self._size_label.configure(text=str(self._font_size))
        self._apply_fonts()

    def _toggle_theme(self) -> None:
        self._dark_mode = not self._dark_mode
        self._apply_theme()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _update_word_count(self) -> None:
        count = count_words(self._text_box.get("1.0", "end-1c"))
        self._word_count_label.configure(text="{} words".format(count))

    def _render(self, state: DisplayState) -> None:
        """Copy a DisplayState into the reader widgets."""
        self._left_label.configure(text=state.parts.left)
        self._pivot_label.configure(text=state.parts.pivot)
        self._right_label.configure(text=state.parts.right)
        if state.next_word is not None:
            self._next_label.configure(text="Next: {}".format(state.next_word))
        else:
            self._next_label.configure(text="")

        self._progress_label.configure(
            text="{} / {} words".format(state.current_index, state.total_words)
        )
        self._pct_label.configure(text="{}%".format(state.progress_pct))

        self._rendering = True
        try:
            self._progress_scale.configure(to=max(state.total_words - 1, 0))
            self._progress_scale.set(state.current_index)
        finally:
            self._rendering = False

        self._play_btn.configure(
            text="Pause" if state.is_playing else "Play",
            state=tk.DISABLED if state.is_empty else tk.NORMAL,
        )
        self._wpm_label.configure(text="Speed: {} WPM".format(state.wpm))

    def _apply_fonts(self) -> None:
        word_font = (_FONT_FAMILY, self._font_size)
        self._left_label.configure(font=word_font)
        self._right_label.configure(font=word_font)
        self._pivot_label.configure(font=(_FONT_FAMILY, self._font_size, "bold"))

    def _apply_theme(self) -> None:
        colors = _THEMES["dark" if self._dark_mode else "light"]
        self._root.configure(bg=colors["bg"])
        # Plain tk frames and labels everywhere get the page colors first
        pending = list(self._root.winfo_children())
        while pending:
            widget = pending.pop()
            pending.extend(widget.winfo_children())
            if isinstance(widget, tk.Frame):
                widget.configure(bg=colors["bg"])
            elif isinstance(widget, tk.Label):
                widget.configure(bg=colors["bg"], fg=colors["fg"])
        # Then the stage overrides
        for widget in (self._stage, self._left_label, self._right_label, self._pivot_label, self._next_label):
            widget.configure(bg=colors["stage"])
        self._left_label.configure(fg=colors["fg"])
        self._right_label.configure(fg=colors["fg"])
        self._pivot_label.configure(fg=colors["pivot"])
        self._next_label.configure(fg=colors["muted"])
        self._text_box.configure(
            bg=colors["stage"], fg=colors["fg"], insertbackground=colors["fg"]
        )
        self._apply_fonts()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Launch the Tkinter reader.

    RULES:
    - Blocks until the window is closed
    - Must be called from the main thread
    """
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    root = tk.Tk()
    SpeedReaderApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
