# mote/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
The KeyBinder class translates raw curses input into the editor's logical
input events (`KeyPress`, `Resize`, `OtherEvent`). It is the only place that
knows about curses key codes, control characters and terminal escape
sequences; everything above it works with `KeyCode` values.

Key Features:
- Reads wide characters with ``get_wch()`` so non-ASCII text arrives intact.
- Maps curses function-key codes (arrows, PageUp/PageDown, Home/End,
  Backspace, Delete, Enter, resize).
- Maps control characters: Enter, Backspace, Tab and Ctrl+letter chords.
- Parses ESC sequences robustly: a lone ESC, CSI/SS3 sequences for keys the
  terminal did not translate, and ESC typed quickly before another key (the
  ESC is delivered and the following keys are pushed back for the next read).
  Sequences it does not know are reported as `OtherEvent`.

Intended Usage:
---------------
Instantiate KeyBinder with the curses window and call `get_key_input` to
block for the next event.
"""

import curses
import logging
import re
from typing import Optional, Union

from mote.core.Events import Event, KeyCode, KeyPress, OtherEvent, Resize
from mote.utils.logging_config import KEY_LOGGER


ESC = "\x1b"

# Control characters with a dedicated key.
CONTROL_KEYS: dict[str, KeyCode] = {
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
    "\t": KeyCode.TAB,
}


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Decodes terminal input into editor events.

    Attributes:
        stdscr: The curses window input is read from.
        key_code_map (dict): curses key codes to logical `KeyCode` values.
    """

    # Normalized escape sequences map. Keys do NOT include the leading ESC (0x1B),
    # because get_key_input() already strips/reads after ESC.
    ESCAPE_SEQUENCE_MAP: dict[str, KeyCode] = {
        # Arrows (CSI and SS3)
        "[A": KeyCode.UP, "[B": KeyCode.DOWN, "[C": KeyCode.RIGHT, "[D": KeyCode.LEFT,
        "OA": KeyCode.UP, "OB": KeyCode.DOWN, "OC": KeyCode.RIGHT, "OD": KeyCode.LEFT,

        # Home/End (CSI/SS3 and tilde variants)
        "[H": KeyCode.HOME, "[F": KeyCode.END, "OH": KeyCode.HOME, "OF": KeyCode.END,
        "[1~": KeyCode.HOME, "[4~": KeyCode.END, "[7~": KeyCode.HOME, "[8~": KeyCode.END,

        # Delete/PageUp/PageDown (~ style)
        "[3~": KeyCode.DELETE, "[5~": KeyCode.PAGE_UP, "[6~": KeyCode.PAGE_DOWN,
    }

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.key_code_map = self._build_key_code_map()

    @staticmethod
    def _build_key_code_map() -> dict[int, KeyCode]:
        return {
            curses.KEY_LEFT: KeyCode.LEFT,
            curses.KEY_RIGHT: KeyCode.RIGHT,
            curses.KEY_UP: KeyCode.UP,
            curses.KEY_DOWN: KeyCode.DOWN,
            curses.KEY_PPAGE: KeyCode.PAGE_UP,
            curses.KEY_NPAGE: KeyCode.PAGE_DOWN,
            curses.KEY_HOME: KeyCode.HOME,
            curses.KEY_END: KeyCode.END,
            curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
            curses.KEY_DC: KeyCode.DELETE,
            curses.KEY_ENTER: KeyCode.ENTER,
        }

    # ---------------------- Decoding --------------------
    def decode_key_code(self, code: int) -> Event:
        """Maps an integer key code returned by ``get_wch()``."""
        if code == curses.KEY_RESIZE:
            height, width = self.stdscr.getmaxyx()
            return Resize(width, height)
        key = self.key_code_map.get(code)
        if key is not None:
            return KeyPress(key)
        return OtherEvent(f"keycode {code}")

    def decode_char(self, ch: str) -> Event:
        """Maps a character returned by ``get_wch()`` (ESC excluded)."""
        if ch in CONTROL_KEYS:
            return KeyPress(CONTROL_KEYS[ch])
        code = ord(ch)
        if 1 <= code <= 26:
            # Ctrl+A .. Ctrl+Z arrive as 0x01 .. 0x1a
            return KeyPress.of_char(chr(code + 96), ctrl=True)
        if code < 32 or code == 127:
            return OtherEvent(f"control {code:#04x}")
        return KeyPress.of_char(ch)

    def decode_escape_sequence(self, seq: str) -> Event:
        """Maps the characters that followed an ESC.

        Returns:
            Event: ESC for a lone ESC, the mapped key for a known CSI/SS3
            sequence, and an `OtherEvent` for any sequence it does not know
            (e.g. Ctrl+arrows), so that unknown keys never act as ESC.
        """
        if not seq:
            logging.debug("get_key_input: standalone ESC")
            return KeyPress(KeyCode.ESC)

        # Some terminals deliver ESC-prefixed sequences: strip any leading ESC.
        if seq[0] == ESC:
            seq = seq[1:]

        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if mapped is None:
            # Tolerant cleanup: keep only tokens relevant to term sequences.
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
            if mapped is not None:
                logging.debug("get_key_input: cleaned %r -> %r -> %s", seq, cleaned, mapped)

        if mapped is not None:
            return KeyPress(mapped)

        logging.debug("get_key_input: unhandled escape sequence: ESC + %r", seq)
        return OtherEvent(f"esc-seq {seq!r}")

    @staticmethod
    def starts_sequence(pending: list[Union[str, int]]) -> bool:
        """True when the input queued after an ESC opens a CSI/SS3 sequence."""
        return bool(pending) and pending[0] in ("[", "O", ESC)

    @staticmethod
    def _push_back(pending: list[Union[str, int]]) -> None:
        """Returns keys read ahead of an ESC to curses, so the next reads see them in order."""
        # curses hands pushed-back keys out last-in first-out
        for item in reversed(pending):
            try:
                if isinstance(item, int):
                    curses.ungetch(item)
                else:
                    curses.unget_wch(item)
            except curses.error as e:
                logging.debug(f"get_key_input: could not push back {item!r}: {e!r}")
                break

    # ---------------------- Reading --------------------
    def _read_pending(self, target: "curses.window") -> list[Union[str, int]]:
        """Drains the keys already queued after an ESC, without blocking."""
        pending: list[Union[str, int]] = []
        target.nodelay(True)
        try:
            while True:
                try:
                    pending.append(target.get_wch())
                except curses.error:
                    break  # no more input queued
        finally:
            target.nodelay(False)
        return pending

    def get_key_input(self, window: Optional["curses.window"] = None) -> Event:
        """Blocks for the next key and returns it as an editor event.

        An ESC typed just before another key (e.g. ``ESC j``) is delivered on
        its own and the keys after it are pushed back for the next reads.

        Returns:
            Event: A `KeyPress`, a `Resize`, or an `OtherEvent` for input the
            editor does not act on (including curses read errors).
        """
        target = window or self.stdscr
        try:
            raw = target.get_wch()
        except curses.error as e:
            logging.debug(f"get_key_input: read error {e!r}")
            return OtherEvent("read error")

        KEY_LOGGER.debug(f"raw={raw!r}")

        if isinstance(raw, int):
            return self.decode_key_code(raw)
        if raw != ESC:
            return self.decode_char(raw)

        pending = self._read_pending(target)
        if pending and not self.starts_sequence(pending):
            self._push_back(pending)
            return KeyPress(KeyCode.ESC)
        # Rare extended codes inside a sequence become markers the cleanup regex drops.
        seq = "".join(p if isinstance(p, str) else f"<{p}>" for p in pending)
        return self.decode_escape_sequence(seq)
