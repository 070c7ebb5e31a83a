# mote/core/ModeMachine.py
"""Modal key handling.

The editor is always in exactly one `Mode`. Each mode has a handler that
interprets a `KeyPress`, mutates the editor, and returns a `Transition`
naming the next mode and whether the session keeps running. The handlers
are collected in `HANDLERS`, keyed by mode.

Key tables:

NORMAL
    ``i`` insert mode, ``:`` command mode, ``h j k l`` and arrows move,
    ``^``/``$`` line start/end, ``G`` last line, ``Ctrl-g`` first line,
    PageUp/PageDown move by one screen. Everything else is ignored.
INSERT
    printable characters are inserted; Backspace, Delete and Enter edit;
    arrows move; Esc returns to NORMAL.
COMMAND
    printable characters extend the command line; Backspace shortens it;
    Enter executes it; Esc discards it.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, NamedTuple

from wcwidth import wcwidth

from mote.core.Commands import execute_command
from mote.core.Events import KeyCode, KeyPress

if TYPE_CHECKING:
    from mote.core.Mote import Mote


class Mode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    COMMAND = "COMMAND"


class Transition(NamedTuple):
    next_mode: Mode
    keep_running: bool = True


def is_printable(key: KeyPress) -> bool:
    """True for a character key, not chorded with Ctrl, that occupies screen cells."""
    if key.code is not KeyCode.CHAR or key.ctrl or not key.char:
        return False
    return len(key.char) == 1 and wcwidth(key.char) > 0


def _move_vertically(editor: "Mote", move: Callable[[], None], text_area_height: int) -> None:
    move()
    editor.scroll_to_cursor(text_area_height)


# ---------------------------------------------------------------------------
# NORMAL
# ---------------------------------------------------------------------------
def handle_normal_key(editor: "Mote", key: KeyPress, text_area_height: int) -> Transition:
    buffer = editor.buffer
    code = key.code

    if key.is_char("i"):
        return Transition(Mode.INSERT)
    if key.is_char(":"):
        return Transition(Mode.COMMAND)

    if key.is_char("h") or code is KeyCode.LEFT:
        buffer.move_left()
        editor.scroll_to_cursor(text_area_height)
    elif key.is_char("l") or code is KeyCode.RIGHT:
        buffer.move_right()
        editor.scroll_to_cursor(text_area_height)
    elif key.is_char("k") or code is KeyCode.UP:
        _move_vertically(editor, buffer.move_up, text_area_height)
    elif key.is_char("j") or code is KeyCode.DOWN:
        _move_vertically(editor, buffer.move_down, text_area_height)
    elif key.is_char("^"):
        buffer.move_line_start()
    elif key.is_char("$"):
        buffer.move_line_end()
    elif key.is_char("G"):
        _move_vertically(editor, buffer.goto_last_line, text_area_height)
    elif key.code is KeyCode.CHAR and key.char == "g" and key.ctrl:
        _move_vertically(editor, buffer.goto_first_line, text_area_height)
    elif code is KeyCode.PAGE_UP:
        _move_vertically(editor, lambda: buffer.move_rows(-text_area_height), text_area_height)
    elif code is KeyCode.PAGE_DOWN:
        _move_vertically(editor, lambda: buffer.move_rows(text_area_height), text_area_height)
    elif code is KeyCode.ESC:
        editor.command_input = ""
    else:
        logging.debug(f"handle_normal_key: ignoring {key}")

    return Transition(Mode.NORMAL)


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------
def handle_insert_key(editor: "Mote", key: KeyPress, text_area_height: int) -> Transition:
    buffer = editor.buffer
    code = key.code
    next_mode = Mode.INSERT

    if is_printable(key):
        buffer.insert_char(key.char)
    elif code is KeyCode.BACKSPACE:
        buffer.delete_char_before()
    elif code is KeyCode.DELETE:
        buffer.delete_char_after()
    elif code is KeyCode.ENTER:
        buffer.split_line()
    elif code is KeyCode.LEFT:
        buffer.move_left()
    elif code is KeyCode.RIGHT:
        buffer.move_right()
    elif code is KeyCode.UP:
        buffer.move_up()
    elif code is KeyCode.DOWN:
        buffer.move_down()
    elif code is KeyCode.ESC:
        next_mode = Mode.NORMAL
    else:
        logging.debug(f"handle_insert_key: ignoring {key}")

    editor.scroll_to_cursor(text_area_height)
    return Transition(next_mode)


# ---------------------------------------------------------------------------
# COMMAND
# ---------------------------------------------------------------------------
def handle_command_key(editor: "Mote", key: KeyPress, text_area_height: int) -> Transition:
    code = key.code

    if is_printable(key):
        editor.command_input += key.char
    elif code is KeyCode.BACKSPACE:
        editor.command_input = editor.command_input[:-1]
    elif code is KeyCode.ENTER:
        keep_running = execute_command(editor, editor.command_input)
        return Transition(Mode.NORMAL, keep_running)
    elif code is KeyCode.ESC:
        return Transition(Mode.NORMAL)
    else:
        logging.debug(f"handle_command_key: ignoring {key}")

    return Transition(Mode.COMMAND)


HANDLERS: dict[Mode, Callable[["Mote", KeyPress, int], Transition]] = {
    Mode.NORMAL: handle_normal_key,
    Mode.INSERT: handle_insert_key,
    Mode.COMMAND: handle_command_key,
}
