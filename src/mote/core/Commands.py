# mote/core/Commands.py
"""Ex-style commands entered on the ``:`` prompt.

Supported commands (case-sensitive)::

    :q            quit; refused while the buffer has unsaved changes
    :q!           quit unconditionally
    :w [path]     write the buffer (to *path*, which then becomes its file name)
    :wq [path]    write, then quit only if the write succeeded

Each command function returns ``True`` to keep the editor running and
``False`` to end the session. User-facing outcomes are reported through
the editor's status message.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from mote.core.Buffer import FileWriteError, NoFilenameError

if TYPE_CHECKING:
    from mote.core.Mote import Mote

logger = logging.getLogger("mote")

UNSAVED_CHANGES_MSG = "No write since last change (add ! to override)"
NO_FILENAME_MSG = "No file name. Use :w <filename> to save."


def write_buffer(editor: "Mote", path: Optional[str] = None) -> bool:
    """Saves the editor's buffer and reports the outcome.

    Returns:
        bool: True if the buffer is clean after the attempt.
    """
    buffer = editor.buffer
    try:
        line_count = buffer.save(path)
    except NoFilenameError:
        editor.set_message(NO_FILENAME_MSG)
        return False
    except FileWriteError as e:
        name = path or buffer.filename
        editor.set_message(f"Error writing {name}: {e}")
        return False

    editor.set_message(f'"{buffer.filename}" written, {line_count} lines')
    logger.info(f"Wrote {line_count} lines to '{buffer.filename}'.")
    return not buffer.dirty


def cmd_quit(editor: "Mote", arg: Optional[str]) -> bool:
    if editor.buffer.dirty:
        editor.set_message(UNSAVED_CHANGES_MSG)
        return True
    return False


def cmd_force_quit(editor: "Mote", arg: Optional[str]) -> bool:
    return False


def cmd_write(editor: "Mote", arg: Optional[str]) -> bool:
    write_buffer(editor, arg)
    return True


def cmd_write_quit(editor: "Mote", arg: Optional[str]) -> bool:
    # Quitting after a failed save would drop the unsaved changes.
    return not write_buffer(editor, arg)


COMMANDS: dict[str, Callable[["Mote", Optional[str]], bool]] = {
    "q": cmd_quit,
    "q!": cmd_force_quit,
    "w": cmd_write,
    "wq": cmd_write_quit,
}

# Commands that accept a file name argument.
TAKES_PATH = {"w", "wq"}


def execute_command(editor: "Mote", command_line: str) -> bool:
    """Parses and runs one command line.

    Args:
        editor: The editor the command acts on.
        command_line: The text typed after ``:``; surrounding whitespace is ignored.

    Returns:
        bool: False if the session should end, True otherwise.
    """
    text = command_line.strip()
    if not text:
        return True

    name, _, rest = text.partition(" ")
    arg = rest.strip() or None
    handler = COMMANDS.get(name)
    if handler is None or (arg is not None and name not in TAKES_PATH):
        logging.debug(f"execute_command: unknown command {text!r}")
        editor.set_message(f"Unknown command: {text}")
        return True

    logging.debug(f"execute_command: running {name!r} with argument {arg!r}")
    return handler(editor, arg)
