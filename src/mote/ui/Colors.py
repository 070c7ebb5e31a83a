# mote/ui/Colors.py
"""Colors.py
==================
Colour tokens, interpolation and the per-region colour fallback chains.

A colour token in the configuration file is either ``#RRGGBB`` or one of the
named colours in `NAMED_COLORS` (case-insensitive; ``-`` or a space may be
used instead of ``_``). Tokens that are neither resolve to ``None``, which the
terminal layer treats as "terminal default".

Everything in this module is pure: no curses calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from mote.utils.config import Config


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "dark_red": (128, 0, 0),
    "dark_green": (0, 128, 0),
    "dark_yellow": (128, 128, 0),
    "dark_blue": (0, 0, 128),
    "dark_magenta": (128, 0, 128),
    "dark_cyan": (0, 128, 128),
    "grey": (192, 192, 192),
    "gray": (192, 192, 192),
    "dark_grey": (128, 128, 128),
    "dark_gray": (128, 128, 128),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "yellow": (255, 255, 0),
    "blue": (0, 0, 255),
    "magenta": (255, 0, 255),
    "cyan": (0, 255, 255),
    "white": (255, 255, 255),
}

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def parse_color(token: Optional[str]) -> Optional[Color]:
    """Parses a colour token; returns None when it is missing or not recognised."""
    if not isinstance(token, str):
        return None
    token = token.strip()
    if len(token) == 7 and token[0] == "#" and set(token[1:]) <= _HEX_DIGITS:
        return Color(int(token[1:3], 16), int(token[3:5], 16), int(token[5:7], 16))

    key = token.lower().replace("-", "_").replace(" ", "_")
    rgb = NAMED_COLORS.get(key)
    if rgb is None:
        if token:
            logging.debug(f"parse_color: unrecognised colour token {token!r}")
        return None
    return Color(*rgb)


def first_color(*tokens: Optional[str]) -> Optional[Color]:
    """Returns the first token that parses to a colour, or None."""
    for token in tokens:
        color = parse_color(token)
        if color is not None:
            return color
    return None


def lerp(a: Color, b: Color, t: float) -> Color:
    """Linear interpolation between two colours; *t* is clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return Color(
        round(a.r + (b.r - a.r) * t),
        round(a.g + (b.g - a.g) * t),
        round(a.b + (b.b - a.b) * t),
    )


def gradient(
    primary: Optional[Color],
    secondary: Optional[Color],
    columns: int,
    gradient_width: int,
) -> list[Optional[Color]]:
    """Per-column colours of a horizontal gradient.

    Column ``c`` uses ``t = c / (gradient_width - 1)``; columns at or beyond
    *gradient_width* get the secondary colour. A missing endpoint is replaced
    by the other one; with both missing every column is None.
    """
    if columns <= 0:
        return []
    if primary is None and secondary is None:
        return [None] * columns
    primary = primary or secondary
    secondary = secondary or primary
    if primary == secondary:
        return [primary] * columns

    gradient_width = max(1, gradient_width)
    cells: list[Optional[Color]] = []
    for c in range(columns):
        if gradient_width == 1:
            t = 0.0 if c == 0 else 1.0
        else:
            t = c / (gradient_width - 1)
        cells.append(lerp(primary, secondary, t))
    return cells


def nearest_index(color: Color, palette: Sequence[tuple[int, int, int]]) -> int:
    """Index of the palette entry closest to *color* (squared RGB distance)."""
    return min(
        range(len(palette)),
        key=lambda i: sum((c - p) ** 2 for c, p in zip(color.rgb, palette[i])),
    )


class ColorResolver:
    """Resolves every screen region's colours from the configuration.

    Each region has an ordered list of sources; the first one present and
    parseable wins, otherwise the region uses the terminal default (None).
    """

    def __init__(self, config: Config) -> None:
        colors = config.colors
        bar = config.mode_bar
        box = config.command_box

        self.text_fg = first_color(colors.text)
        self.text_bg = first_color(colors.background)

        self.bar_primary = first_color(bar.primary_color, colors.status_bar_background)
        self.bar_secondary = first_color(bar.secondary_color) or self.bar_primary
        self.bar_text = first_color(bar.text_color, colors.status_bar_text, colors.text)

        self.box_primary = first_color(
            box.primary_color, colors.command_box_background, colors.background
        )
        self.box_secondary = first_color(box.secondary_color) or self.box_primary
        self.box_text = first_color(box.text_color, colors.command_box_text, colors.text)
        self.box_border = first_color(colors.command_box_border) or self.box_text

        self.message = first_color(colors.message_text, colors.text)
