# mote/core/Mote.py
"""mote.core.Mote
================
Mote: the editor session.

The Mote class owns all editor state for the lifetime of a session:

- the text `Buffer` (lines, cursor, file name, dirty flag),
- the `Viewport` (vertical scroll offset),
- the current `Mode` and the command line typed in COMMAND mode,
- the one-shot status message,
- the typed `Config`.

Key presses are routed through `handle_key_event`, which dispatches to the
handler of the current mode (see `mote.core.ModeMachine`) and applies the
resulting transition. `run` is the host loop: read one event from the
terminal, update the state, render a frame, repeat until a quit command.
"""

import logging
from typing import TYPE_CHECKING, Optional

from mote.core.Buffer import Buffer, FileReadError
from mote.core.Events import Event, KeyPress, Resize
from mote.core.ModeMachine import HANDLERS, Mode
from mote.core.Viewport import Viewport
from mote.utils.config import Config
from mote.utils.logging_config import KEY_LOGGER, logger

if TYPE_CHECKING:
    from mote.ui.Terminal import Terminal

DEFAULT_BAR_HEIGHT = 2


class Mote:
    """The editor session state and its event handling.

    Attributes:
        buffer (Buffer): The document being edited.
        viewport (Viewport): Scroll state of the text area.
        mode (Mode): The active mode.
        command_input (str): Text typed after ``:`` in COMMAND mode.
        message (str): Status message shown for one key-handling cycle.
        config (Config): Presentation options.
        running (bool): False once a quit command has been accepted.
    """

    def __init__(self, filename: Optional[str] = None, config: Optional[Config] = None) -> None:
        self.config: Config = config or Config()
        self.viewport = Viewport()
        self.mode: Mode = Mode.NORMAL
        self.command_input: str = ""
        self.message: str = ""
        self.running: bool = True

        if filename:
            try:
                self.buffer = Buffer.load(filename)
            except FileReadError as e:
                logger.warning(f"Could not read '{filename}': {e}")
                self.buffer = Buffer(filename=filename, dirty=True)
                self.set_message(f"Error reading file {filename}: {e}")
        else:
            # Nothing on disk backs this buffer yet
            self.buffer = Buffer(dirty=True)

        logger.info(f"Mote initialized. File: {filename!r}")

    # --- Status and layout ---
    def set_message(self, message: str) -> None:
        self.message = str(message)
        logging.debug(f"Status message set to: '{self.message}'")

    @property
    def bar_height(self) -> int:
        height = self.config.mode_bar.height
        return DEFAULT_BAR_HEIGHT if height is None else height

    def text_area_height(self, terminal_height: int) -> int:
        """Rows available for buffer text once the mode bar is drawn."""
        return max(1, terminal_height - self.bar_height)

    def scroll_to_cursor(self, text_area_height: int) -> None:
        self.viewport.scroll_to(self.buffer.cursor_y, text_area_height)

    # --- Event handling ---
    def handle_key_event(self, event: KeyPress, text_area_height: int) -> bool:
        """Processes one key press in the current mode.

        The status message is cleared first, so a message is visible only
        until the next key press unless the handler sets a new one.

        Returns:
            bool: False when the session should end.
        """
        KEY_LOGGER.debug(f"mode={self.mode.value} key={event}")
        self.message = ""

        previous = self.mode
        transition = HANDLERS[previous](self, event, text_area_height)
        self.mode = transition.next_mode

        if previous is not self.mode:
            logging.debug(f"Mode change: {previous.value} -> {self.mode.value}")
            if Mode.COMMAND in (previous, self.mode):
                self.command_input = ""
            if previous is Mode.INSERT and self.mode is Mode.NORMAL:
                self.buffer.clamp_cursor_x()

        if not transition.keep_running:
            self.running = False
        return transition.keep_running

    def handle_resize(self, text_area_height: int) -> None:
        """Re-establishes cursor visibility for a new text area height."""
        logging.debug(f"handle_resize: text area height {text_area_height}")
        self.scroll_to_cursor(text_area_height)

    def handle_event(self, event: Event, terminal_height: int) -> bool:
        """Routes any terminal event. Returns False when the session should end."""
        if isinstance(event, KeyPress):
            return self.handle_key_event(event, self.text_area_height(terminal_height))
        if isinstance(event, Resize):
            self.handle_resize(self.text_area_height(event.height))
        else:
            logging.debug(f"Ignoring event: {event}")
        return True

    # --- Host loop ---
    def run(self, terminal: "Terminal") -> None:
        """The main event loop of the editor.

        One event is read, fully processed, and a frame is rendered before the
        next read. The loop ends when a quit command is accepted.
        """
        from mote.ui.DrawScreen import DrawScreen

        drawer = DrawScreen(self, self.config)
        logger.info("Editor main loop started.")

        _, height = terminal.size()
        self.handle_resize(self.text_area_height(height))
        drawer.draw(terminal)

        while self.running:
            event = terminal.read_event()
            if isinstance(event, Resize):
                height = event.height
            else:
                _, height = terminal.size()
            if not self.handle_event(event, height):
                break
            drawer.draw(terminal)

        logger.info("Editor main loop finished.")
