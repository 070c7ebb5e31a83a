# mote/ui/Terminal.py
"""The curses terminal surface the editor draws on and reads from.

`Terminal` puts the terminal into an application-friendly state:

- Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
- Application cursor keys (smkx/rmkx) so arrows are delivered to the app.
- raw + noecho (+ cbreak fallback), keypad(True).
- Disable screen scrolling at curses level (scrollok(False)).

It also owns the drawing primitives used by `DrawScreen.draw`: positioned
writes, colours (curses colour pairs allocated on demand), cursor placement
and cursor shape (DECSCUSR). Use it as a context manager so the terminal is
restored on every exit path::

    with Terminal(stdscr) as terminal:
        editor.run(terminal)
"""

from __future__ import annotations

import curses
import logging
import sys
from typing import Optional, TextIO

from mote.core.Events import Event
from mote.ui.Colors import Color, nearest_index
from mote.ui.DrawScreen import CursorShape
from mote.ui.KeyBinder import KeyBinder
from mote.utils.utils import hex_to_xterm

# DECSCUSR: 1 = blinking block, 5 = blinking bar, 0 = terminal default
CURSOR_SHAPE_SEQUENCES: dict[CursorShape, str] = {
    CursorShape.BLOCK: "\x1b[1 q",
    CursorShape.BAR: "\x1b[5 q",
}
CURSOR_SHAPE_RESET = "\x1b[0 q"

# RGB of the 8 basic curses colours, in COLOR_BLACK .. COLOR_WHITE order.
BASIC_PALETTE: list[tuple[int, int, int]] = [
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
]


class Terminal:
    """A curses screen in raw mode with on-demand colour pairs.

    Always pair `enter()` with `leave()` (or use the context manager).
    """

    def __init__(self, stdscr: "curses.window", out: Optional[TextIO] = None) -> None:
        self.stdscr = stdscr
        self.keybinder = KeyBinder(stdscr)
        self._out: TextIO = out or sys.stdout
        self._entered: bool = False
        self._has_colors: bool = False
        self._default_colors: bool = False
        self._pairs: dict[tuple[int, int], int] = {}
        self._fg: Optional[Color] = None
        self._bg: Optional[Color] = None
        self._shape: Optional[CursorShape] = None
        self._emitted_shape: Optional[CursorShape] = None

    # ── lifecycle ─────────────────────────────────────────────────────────────

    def __enter__(self) -> "Terminal":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.leave()
        return False

    def enter(self) -> None:
        stdscr = self.stdscr

        # Switch to alternate screen (smcup) BEFORE clearing.
        self._tputs("smcup")

        # Enable application cursor keys (smkx).
        self._tputs("smkx")

        # Input modes.
        try:
            curses.raw()  # deliver all control chars (including ^Z) to us
        except curses.error:
            curses.cbreak()  # fallback if raw is unavailable
        curses.noecho()
        stdscr.keypad(True)

        # Short ESC delay so a lone ESC is seen quickly, yet CSI sequences still arrive whole.
        try:
            curses.set_escdelay(35)
        except (curses.error, AttributeError) as e:
            logging.debug("set_escdelay unavailable: %r", e)

        self._init_colors()
        try:
            curses.curs_set(1)
        except curses.error as e:
            logging.debug("curs_set(1) failed: %r", e)

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("Terminal: entered (alternate screen + app cursor keys).")

    def leave(self) -> None:
        if not self._entered:
            return

        self._write_raw(CURSOR_SHAPE_RESET)

        try:
            self.stdscr.keypad(False)
        except curses.error as e:
            logging.debug("keypad(False) failed: %r", e)

        # Restore cooked modes.
        try:
            curses.noraw()
        except curses.error:
            curses.nocbreak()
        curses.echo()

        # Disable application cursor keys (rmkx) and leave alternate screen (rmcup).
        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logging.debug("Terminal: left (restored terminal modes).")

    # ── drawing ───────────────────────────────────────────────────────────────

    def size(self) -> tuple[int, int]:
        """Returns ``(width, height)`` in cells."""
        height, width = self.stdscr.getmaxyx()
        return width, height

    def clear(self) -> None:
        self.stdscr.erase()

    def write_at(self, x: int, y: int, text: str) -> None:
        """Writes *text* at column *x*, row *y* in the current colours."""
        try:
            self.stdscr.addstr(y, x, text, self._current_attr())
        except curses.error:
            # Writing the bottom-right cell moves the cursor off-screen and
            # raises even though the text was drawn.
            logging.debug(f"write_at({x}, {y}) raised curses.error; ignored")

    def move_cursor(self, x: int, y: int) -> None:
        try:
            self.stdscr.move(y, x)
        except curses.error:
            logging.debug(f"move_cursor({x}, {y}) outside the window; ignored")

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self._shape = shape

    def set_foreground(self, color: Optional[Color]) -> None:
        self._fg = color

    def set_background(self, color: Optional[Color]) -> None:
        self._bg = color

    def flush(self) -> None:
        """Pushes the frame to the screen and applies a changed cursor shape."""
        self.stdscr.refresh()
        if self._shape is not None and self._shape != self._emitted_shape:
            self._write_raw(CURSOR_SHAPE_SEQUENCES[self._shape])
            self._emitted_shape = self._shape

    def read_event(self) -> Event:
        return self.keybinder.get_key_input()

    # ── colours ───────────────────────────────────────────────────────────────

    def _init_colors(self) -> None:
        try:
            self._has_colors = curses.has_colors()
        except curses.error:
            self._has_colors = False
        if not self._has_colors:
            return
        try:
            curses.use_default_colors()  # allow -1 as the "default" colour
            self._default_colors = True
        except curses.error:
            self._default_colors = False

    def color_index(self, color: Optional[Color], is_background: bool = False) -> int:
        """Curses colour number for *color*; -1 (or a basic colour) for the default."""
        if color is None:
            if self._default_colors:
                return -1
            return curses.COLOR_BLACK if is_background else curses.COLOR_WHITE
        if curses.COLORS >= 256:
            return hex_to_xterm(color.hex)
        return nearest_index(color, BASIC_PALETTE[: max(1, min(8, curses.COLORS))])

    def _current_attr(self) -> int:
        if not self._has_colors or (self._fg is None and self._bg is None):
            return curses.A_NORMAL
        key = (self.color_index(self._fg), self.color_index(self._bg, is_background=True))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                logging.warning("Terminal: out of colour pairs; using the default pair.")
                return curses.A_NORMAL
            try:
                curses.init_pair(pair, *key)
            except curses.error as e:
                logging.debug(f"init_pair({pair}, {key}) failed: {e!r}")
                return curses.A_NORMAL
            self._pairs[key] = pair
        return curses.color_pair(pair)

    # ── helpers ───────────────────────────────────────────────────────────────

    def _write_raw(self, sequence: str) -> None:
        try:
            self._out.write(sequence)
            self._out.flush()
        except (OSError, ValueError) as e:
            logging.debug("Terminal: could not write %r: %r", sequence, e)

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Non-fatal where capability is missing (FreeBSD console, etc.).
            logging.debug("tputs(%s) skipped: %r", capname, e)
