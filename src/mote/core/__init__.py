# src/mote/core/__init__.py
"""Public facade for mote.core: re-export main classes from CamelCase modules.

Keeps the CamelCase file names (Buffer.py, ModeMachine.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Buffer import Buffer, FileReadError, FileWriteError, NoFilenameError  # noqa: F401
from .Commands import execute_command  # noqa: F401
from .Events import KeyCode, KeyPress, OtherEvent, Resize  # noqa: F401
from .ModeMachine import Mode, Transition  # noqa: F401
from .Mote import Mote  # noqa: F401
from .Viewport import Viewport  # noqa: F401


__all__ = [
    "Buffer",
    "FileReadError",
    "FileWriteError",
    "NoFilenameError",
    "execute_command",
    "KeyCode",
    "KeyPress",
    "OtherEvent",
    "Resize",
    "Mode",
    "Transition",
    "Mote",
    "Viewport",
]
