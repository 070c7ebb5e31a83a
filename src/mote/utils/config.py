# mote/utils/config.py
"""mote.utils.config
===================

Typed view over the merged configuration dictionary produced by
:func:`mote.utils.utils.load_config`.

The TOML document has three presentation groups, each optional::

    [colors]
    text = "#c9d1d9"
    background = "black"
    status_bar_text = "white"
    status_bar_background = "#303030"
    command_box_text = "white"
    command_box_background = "#1f2430"
    command_box_border = "cyan"
    message_text = "yellow"

    ["mode bar"]
    show_mode = true
    show_filename = true
    show_dirty_indicator = true
    primary_color = "#005f87"
    secondary_color = "#5f00af"
    text_color = "white"
    height = 2
    width = 60

    ["command box"]
    primary_color = "#1f2430"
    secondary_color = "#30364a"
    text_color = "white"
    height = 5
    width = 50
    text = " Command box "

    [logging]
    file_level = "DEBUG"
    log_to_console = false
    log_file = "mote.log"

Every field may be absent. A field of the wrong type is dropped with a
warning so that one bad value never prevents the editor from starting.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Optional, get_args

logger = logging.getLogger("mote")


@dataclass
class ColorsConfig:
    text: Optional[str] = None
    background: Optional[str] = None
    status_bar_text: Optional[str] = None
    status_bar_background: Optional[str] = None
    command_box_text: Optional[str] = None
    command_box_background: Optional[str] = None
    command_box_border: Optional[str] = None
    message_text: Optional[str] = None


@dataclass
class ModeBarConfig:
    show_mode: Optional[bool] = None
    show_filename: Optional[bool] = None
    show_dirty_indicator: Optional[bool] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    text_color: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None


@dataclass
class CommandBoxConfig:
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    text_color: Optional[str] = None
    height: Optional[int] = None
    width: Optional[int] = None
    text: Optional[str] = None


@dataclass
class LoggingConfig:
    file_level: Optional[str] = None
    console_level: Optional[str] = None
    log_to_console: Optional[bool] = None
    separate_error_log: Optional[bool] = None
    log_file: Optional[str] = None


@dataclass
class Config:
    """Editor options. Group names match the TOML table names."""

    colors: ColorsConfig = field(default_factory=ColorsConfig)
    mode_bar: ModeBarConfig = field(default_factory=ModeBarConfig)
    command_box: CommandBoxConfig = field(default_factory=CommandBoxConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "Config":
        """Builds a Config from a (possibly partial) configuration dictionary."""
        data = data if isinstance(data, dict) else {}
        return cls(
            colors=_build_group(ColorsConfig, data.get("colors"), "colors"),
            mode_bar=_build_group(ModeBarConfig, data.get("mode bar"), "mode bar"),
            command_box=_build_group(
                CommandBoxConfig, data.get("command box"), "command box"
            ),
            logging=_build_group(LoggingConfig, data.get("logging"), "logging"),
        )


def _build_group(group_cls: type, raw: Any, group_name: str) -> Any:
    """Instantiates one option group, keeping only well-typed known keys."""
    if raw is None:
        return group_cls()
    if not isinstance(raw, dict):
        logger.warning(f"Config group [{group_name}] is not a table; ignoring it.")
        return group_cls()

    kwargs: dict[str, Any] = {}
    for f in fields(group_cls):
        if f.name not in raw:
            continue
        value = raw[f.name]
        if _matches(f.type, value):
            kwargs[f.name] = value
        else:
            logger.warning(
                f"Config value [{group_name}].{f.name} = {value!r} has the wrong type; ignoring it."
            )

    unknown = set(raw) - {f.name for f in fields(group_cls)}
    if unknown:
        logger.debug(f"Unknown keys in [{group_name}]: {sorted(unknown)}")
    return group_cls(**kwargs)


def _matches(annotation: Any, value: Any) -> bool:
    """Checks a TOML value against an Optional[...] field annotation."""
    if value is None:
        return True
    expected = [arg for arg in get_args(annotation) if arg is not type(None)]
    if bool in expected:
        return isinstance(value, bool)
    if int in expected:
        # bool is a subclass of int; `height = true` is not a height
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if str in expected:
        return isinstance(value, str)
    return False
