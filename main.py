#!/usr/bin/env python3
# /mote/main.py
"""
Mote Main Entry Point
=====================

This script is the primary entry point for launching the mote editor. It performs:
1) Path Setup: ensures the mote package is importable from a source checkout.
2) Configuration & Logging: loads config and initializes logging.
3) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
4) Application Run: instantiates Mote and runs its main loop until a quit command.

Usage::

    python main.py [path]
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import signal
import sys
from typing import Any, Optional

# --- Step 1: Set up the Python Path ---
# Ensure the 'mote' package is importable for source runs.
project_src = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_src not in sys.path:
    sys.path.insert(0, project_src)

from mote.core.Mote import Mote  # noqa: E402
from mote.ui.Terminal import Terminal  # noqa: E402
from mote.utils.config import Config  # noqa: E402
from mote.utils.logging_config import setup_logging  # noqa: E402
from mote.utils.utils import load_config  # noqa: E402

logger = logging.getLogger("mote")


def _resolve_cli_path(argv: list[str]) -> Optional[str]:
    """
    Resolve an optional CLI path from argv[1], expanded to a user path.
    The file does NOT need to exist on disk; the editor binds the name so
    that :w writes to it.
    """
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    if not raw:
        return None
    return os.path.expanduser(raw)


# --- Step 2: Curses Application Runner ---
def main_app_runner(stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`. Puts the terminal into application mode and runs the editor.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path (may or may not exist on disk).
    """
    editor = Mote(file_to_open, config=Config.from_dict(config))

    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        try:
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        except (OSError, ValueError):
            logger.debug("Could not ignore SIGTSTP.", exc_info=True)

    with Terminal(stdscr) as terminal:
        editor.run(terminal)


def start(argv: Optional[list[str]] = None) -> int:
    """
    Loads configuration, initializes logging and locale, and runs the curses
    application via wrapper.

    Returns:
        int: Process exit code; 0 after a quit command, 1 on a fatal error.
    """
    argv = sys.argv if argv is None else argv

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger.info("Mote editor starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = _resolve_cli_path(argv)

    try:
        # wrapper() will set up/tear down curses safely.
        curses.wrapper(main_app_runner, config, file_to_open)
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        return 1

    logger.info("Mote editor shut down gracefully.")
    return 0


if __name__ == "__main__":
    sys.exit(start())
