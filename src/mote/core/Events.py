# mote/core/Events.py
"""Input events delivered by the terminal layer to the editor core.

The terminal decodes raw curses input into one of three event types:

- ``KeyPress``: a logical key, optionally carrying a character and a Ctrl flag.
- ``Resize``: the terminal changed size.
- ``OtherEvent``: anything the editor does not react to (mouse, focus,
  unrecognised escape sequences, unmapped function keys).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class KeyCode(Enum):
    CHAR = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    HOME = auto()
    END = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ENTER = auto()
    TAB = auto()
    ESC = auto()


@dataclass(frozen=True)
class KeyPress:
    """A single logical key press.

    Attributes:
        code: Which key was pressed.
        char: The character for ``KeyCode.CHAR`` presses, otherwise None.
        ctrl: True when the key was chorded with Ctrl.
    """

    code: KeyCode
    char: Optional[str] = None
    ctrl: bool = False

    @classmethod
    def of_char(cls, char: str, ctrl: bool = False) -> "KeyPress":
        return cls(KeyCode.CHAR, char, ctrl)

    def is_char(self, char: str) -> bool:
        """True for a plain (un-chorded) press of *char*."""
        return self.code is KeyCode.CHAR and self.char == char and not self.ctrl


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class OtherEvent:
    description: str = ""


Event = Union[KeyPress, Resize, OtherEvent]
