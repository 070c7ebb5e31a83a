# mote/utils/logging_config.py
"""mote.utils.logging_config
===========================

Logging configuration for the mote editor. It defines the global logger
objects and a single setup function, `setup_logging`, which configures
application-wide handlers and levels from the ``[logging]`` group of the
configuration dictionary.

Features:
    - Rotating file logging for general editor events (mote.log by default).
    - Optional console logging to stderr. Off by default: while the editor
      runs, the screen belongs to curses and stderr output would tear it.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the MOTE_KEYTRACE
      environment variable.
    - Log directories are created on demand, falling back to the system temp
      directory when that fails.
    - Repeated calls replace the root handlers instead of stacking them.
    - Never raises; problems are reported on stderr and logging continues
      with whatever handlers could be created.

Globals:
    logger: Main application logger ("mote").
    KEY_LOGGER: Logger for raw key-press trace events ("mote.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
logger = logging.getLogger("mote")  # main application logger
KEY_LOGGER = logging.getLogger("mote.keyevents")  # raw key-press trace

KEYTRACE_ENV_VAR = "MOTE_KEYTRACE"
FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"
KEYTRACE_FORMAT = "%(asctime)s - %(message)s"
MB = 1024 * 1024


def _prepare_log_path(log_filename: str) -> str:
    """Creates the directory of *log_filename*; returns a temp-dir path on failure."""
    log_dir = os.path.dirname(log_filename)
    if not log_dir or os.path.isdir(log_dir):
        return log_filename
    try:
        os.makedirs(log_dir)
    except OSError as e:
        fallback = os.path.join(tempfile.gettempdir(), os.path.basename(log_filename))
        print(f"Error creating log directory '{log_dir}': {e}; logging to '{fallback}'", file=sys.stderr)
        return fallback
    return log_filename


def _level(name: Any, default: int) -> int:
    """Maps a level name such as ``"info"`` to its numeric value."""
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else default


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backups: int, fmt: str
) -> Optional[logging.Handler]:
    """Builds a rotating file handler, or returns None (after telling stderr) when the file cannot be opened."""
    path = _prepare_log_path(filename)
    try:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    except OSError as e:
        print(f"Error setting up log file '{path}': {e}. File logging may be impaired.", file=sys.stderr)
        return None
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _configure_key_trace() -> None:
    """Attaches keytrace.log to KEY_LOGGER when MOTE_KEYTRACE is set; silences it otherwise."""
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []

    enabled = os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}
    handler = (
        _rotating_handler("keytrace.log", logging.DEBUG, 1 * MB, 3, KEYTRACE_FORMAT)
        if enabled
        else None
    )
    if handler is None:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")
        return

    KEY_LOGGER.addHandler(handler)
    KEY_LOGGER.disabled = False
    logging.info("Key event tracing enabled, logging to '%s'.", handler.baseFilename)


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are installed:

    1. File handler: rotating log file (``log_file``, default ``mote.log``)
       capturing everything from ``file_level`` (default DEBUG) upward.
    2. Console handler: optional ``stderr`` output whose threshold is
       ``console_level`` (default WARNING). Enabled by ``log_to_console``.
    3. Error-file handler: optional rotating error.log that stores only
       ERROR and CRITICAL events (``separate_error_log``).
    4. Key-event handler: rotating keytrace.log, attached to the
       ``mote.keyevents`` logger when ``MOTE_KEYTRACE`` is ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted.
    """
    settings = (config or {}).get("logging") or {}

    file_level = _level(settings.get("file_level", "DEBUG"), logging.DEBUG)
    log_file = str(settings.get("log_file") or "mote.log")

    handlers: list[logging.Handler] = []
    file_handler = _rotating_handler(log_file, file_level, 2 * MB, 5, FILE_FORMAT)
    if file_handler is not None:
        handlers.append(file_handler)

    if settings.get("log_to_console", False):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(_level(settings.get("console_level", "WARNING"), logging.WARNING))
        handlers.append(console_handler)

    if settings.get("separate_error_log", False):
        error_handler = _rotating_handler("error.log", logging.ERROR, 1 * MB, 3, FILE_FORMAT)
        if error_handler is not None:
            handlers.append(error_handler)

    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(file_level)

    _configure_key_trace()

    for handler in handlers:
        target = getattr(handler, "baseFilename", "stderr")
        logging.info(f"Logging to '{target}' at level {logging.getLevelName(handler.level)}.")
