# tests/conftest.py
"""Pytest configuration with shared fixtures for the mote editor tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import MagicMock

import pytest

from mote.core.Mote import Mote
from mote.utils.config import Config


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


# --- curses ---
@pytest.fixture
def curses_mock() -> MagicMock:
    """A stand-in for the `curses` module with a real `error` type and key constants.

    Tests patch it into the module under test, e.g.
    ``patch("mote.ui.KeyBinder.curses", curses_mock)``.
    """
    mock = MagicMock()
    mock.error = CursesError
    constants = {
        "KEY_DOWN": 258,
        "KEY_UP": 259,
        "KEY_LEFT": 260,
        "KEY_RIGHT": 261,
        "KEY_HOME": 262,
        "KEY_BACKSPACE": 263,
        "KEY_DC": 330,
        "KEY_NPAGE": 338,
        "KEY_PPAGE": 339,
        "KEY_ENTER": 343,
        "KEY_END": 360,
        "KEY_RESIZE": 410,
        "COLOR_BLACK": 0,
        "COLOR_WHITE": 7,
        "COLORS": 256,
        "COLOR_PAIRS": 256,
        "A_NORMAL": 0,
    }
    for name, val in constants.items():
        setattr(mock, name, val)
    mock.has_colors.return_value = True
    mock.tigetstr.return_value = None
    mock.color_pair.side_effect = lambda n: n << 8
    return mock


@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr with terminal size set to (24, 80)."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


# --- editor ---
@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def make_editor(config: Config) -> Callable[..., Mote]:
    """Factory for a Mote session preloaded with *lines* and a cursor position.

    The buffer starts clean unless *dirty* is given.
    """

    def _make(
        lines: list[str] | None = None,
        cursor: tuple[int, int] = (0, 0),
        filename: str | None = None,
        dirty: bool = False,
    ) -> Mote:
        editor = Mote(config=config)
        editor.buffer.lines = list(lines) if lines else [""]
        editor.buffer.cursor_x, editor.buffer.cursor_y = cursor
        editor.buffer.filename = filename
        editor.buffer.dirty = dirty
        return editor

    return _make


@pytest.fixture
def text_file(tmp_path: Path) -> Callable[[str, bytes | str], Path]:
    """Writes a file under tmp_path and returns its path."""

    def _write(name: str, content: bytes | str) -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture(autouse=True)
def _quiet_root_logger() -> Generator[None, None, None]:
    """Restores root logger handlers that `setup_logging` replaces."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers = saved_handlers
    root.setLevel(saved_level)
