# mote/utils/utils.py
"""
mote.utils.utils.py
===================

This module provides a collection of core utility functions for the mote editor.

Key functionalities include:
- Robust Configuration Loading: Implements a layered strategy that starts from a
  hardcoded, built-in default configuration, then recursively merges it with
  user-defined settings from `~/.config/mote/config.toml` (or the file named
  by the `MOTE_CONFIG` environment variable).
- Helper Utilities: Includes functions for deep-merging dictionaries and color
  conversion to the xterm-256 palette.

This architecture ensures the editor is always runnable, even if the user
configuration file is missing or corrupted, by falling back to the embedded
defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("mote")

# --- Constants ---
WHITE_FG_IDX = 255
CONFIG_ENV_VAR = "MOTE_CONFIG"


class ConfigParseError(Exception):
    """Raised when the user configuration file cannot be read or parsed."""


# This dictionary is the ultimate fallback, ensuring the editor can ALWAYS start.
# No color tokens here: an unset color means the terminal default.
DEFAULT_CONFIG: Dict[str, Any] = {
    "colors": {},
    "mode bar": {
        "show_mode": True,
        "show_filename": True,
        "show_dirty_indicator": True,
        "height": 2,
    },
    "command box": {
        "height": 5,
        "text": " Command box ",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "mote.log",
    },
}


# --- Helper Functions ---

def get_config_path() -> Path:
    """Returns the path of the user configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "mote" / "config.toml"


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Parses a TOML configuration file.

    Raises:
        ConfigParseError: If the file cannot be read or is not valid TOML.
    """
    try:
        return toml.load(path)
    except (OSError, ValueError, TypeError) as e:
        raise ConfigParseError(f"Could not parse config '{path}': {e}") from e


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the editor can always run.

    A missing user file is not an error. An unreadable or malformed one is
    logged as a warning and the embedded defaults are used instead.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = path if path is not None else get_config_path()
    if user_config_path.is_file():
        try:
            user_config = read_config_file(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except ConfigParseError as e:
            logger.warning(f"{e}. Using defaults.")
    else:
        logger.debug(f"No user config at {user_config_path}; using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
