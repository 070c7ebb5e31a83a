# mote/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen turns the editor state into a frame and paints it on the terminal.

Rendering is split in two steps:

1. `DrawScreen.plan` is pure: from the editor state and the terminal size it
   builds a `DrawPlan`, a list of positioned, coloured `TextRun` objects plus
   the cursor placement. No curses calls are made, so every layout rule can be
   checked in tests.
2. `DrawScreen.draw` executes a plan against a `Terminal`.

Screen layout (height H, mode bar height B, default 2)::

    rows 0 .. H-B-1   buffer text, starting at the viewport offset
    row  H-B-1        status message (NORMAL/INSERT), over the last text row
    row  H-B          horizontal rule  ─────────────────
    row  H-1          MODE | file name | [Modified]

In COMMAND mode a bordered box with the ``:`` prompt is drawn centred on top.
Wide characters (CJK etc.) are measured with `wcwidth`; text is clipped at
the right edge of the screen, never wrapped.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from wcwidth import wcswidth, wcwidth

from mote.core.ModeMachine import Mode
from mote.ui.Colors import Color, ColorResolver, gradient
from mote.utils.config import Config

if TYPE_CHECKING:
    from mote.core.Mote import Mote
    from mote.ui.Terminal import Terminal


MIN_BOX_WIDTH = 40
MAX_BOX_WIDTH = 80
DEFAULT_BOX_HEIGHT = 5
DEFAULT_BOX_LABEL = " Command box "
RULE_CHAR = "─"
NO_NAME = "[No Name]"
MODIFIED = "[Modified]"


class CursorShape(Enum):
    BLOCK = "block"
    BAR = "bar"


@dataclass(frozen=True)
class TextRun:
    x: int
    y: int
    text: str
    fg: Optional[Color] = None
    bg: Optional[Color] = None


@dataclass(frozen=True)
class CursorPlacement:
    x: int
    y: int
    shape: CursorShape


@dataclass
class DrawPlan:
    runs: list[TextRun] = field(default_factory=list)
    cursor: CursorPlacement = CursorPlacement(0, 0, CursorShape.BLOCK)


# ---------------------------------------------------------------------------
# Width helpers
# ---------------------------------------------------------------------------
def char_width(ch: str) -> int:
    """Cells taken by one code point; non-printable characters count as one."""
    w = wcwidth(ch)
    return 1 if w < 0 else w


def get_string_width(text: str) -> int:
    """Return the printable width of *text* in terminal cells."""
    if text.isascii() and text.isprintable():
        return len(text)
    width = wcswidth(text)
    if width < 0:
        width = sum(char_width(ch) for ch in text)
    return width


def truncate_string(s: str, max_width: int) -> str:
    """Return `s` clipped to visual width `max_width`.

    A wide character that would straddle the limit is dropped entirely.
    """
    result: list[str] = []
    consumed = 0
    for ch in s:
        w = char_width(ch)
        if consumed + w > max_width:
            break
        result.append(ch)
        consumed += w
    return "".join(result)


def displayable(s: str) -> str:
    """Replaces control characters (tabs, stray escapes) with '?' so the terminal does not interpret them."""
    if s.isprintable():
        return s
    return "".join(ch if wcwidth(ch) >= 0 else "?" for ch in s)


def pad_to_width(s: str, width: int) -> str:
    s = truncate_string(s, width)
    return s + " " * (width - get_string_width(s))


## ================= class DrawScreen ==============================
class DrawScreen:
    """Lays out and paints one frame of the editor.

    Attributes:
        editor (Mote): The session whose state is rendered.
        config (Config): Presentation options.
        colors (ColorResolver): Resolved colours of every screen region.
    """

    def __init__(self, editor: "Mote", config: Config) -> None:
        self.editor = editor
        self.config = config
        self.colors = ColorResolver(config)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def plan(self, width: int, height: int) -> DrawPlan:
        """Builds the frame for a terminal of *width* x *height* cells."""
        plan = DrawPlan()
        if width <= 0 or height <= 0:
            return plan

        text_area_height = self.editor.text_area_height(height)
        self._plan_text_area(plan, width, height, text_area_height)
        self._plan_mode_bar(plan, width, height)

        mode = self.editor.mode
        if mode is Mode.COMMAND:
            plan.cursor = self._plan_command_box(plan, width, height)
        else:
            self._plan_message(plan, width, height)
            plan.cursor = self._text_cursor(width, height, text_area_height)
        return plan

    def _plan_text_area(
        self, plan: DrawPlan, width: int, height: int, text_area_height: int
    ) -> None:
        buffer = self.editor.buffer
        offset = self.editor.viewport.offset
        visible = self.editor.viewport.visible_rows(text_area_height, len(buffer.lines))
        fg, bg = self.colors.text_fg, self.colors.text_bg

        for row in range(min(text_area_height, height)):
            idx = offset + row
            text = displayable(buffer.lines[idx]) if idx in visible else ""
            # Only pad when a background colour must fill the row
            text = pad_to_width(text, width) if bg is not None else truncate_string(text, width)
            if text:
                plan.runs.append(TextRun(0, row, text, fg, bg))

    def _plan_mode_bar(self, plan: DrawPlan, width: int, height: int) -> None:
        bar_height = self.editor.bar_height
        if bar_height <= 0:
            return

        bar = self.config.mode_bar
        gradient_width = bar.width if bar.width else width
        bgs = gradient(self.colors.bar_primary, self.colors.bar_secondary, width, gradient_width)
        fg = self.colors.bar_text

        for i in range(bar_height):
            y = height - bar_height + i
            if y < 0:
                continue
            if i == bar_height - 1:
                text = self.status_line()
            elif i == 0:
                text = RULE_CHAR * width
            else:
                text = ""
            plan.runs.extend(_row_runs(0, y, [(pad_to_width(text, width), fg)], bgs))

    def status_line(self) -> str:
        """The mode bar's status text, e.g. ``INSERT | notes.txt | [Modified]``."""
        bar = self.config.mode_bar
        buffer = self.editor.buffer
        segments: list[str] = []
        if bar.show_mode is not False:
            segments.append(self.editor.mode.value)
        if bar.show_filename is not False:
            segments.append(displayable(buffer.filename) if buffer.filename else NO_NAME)
        if bar.show_dirty_indicator is not False and buffer.dirty:
            segments.append(MODIFIED)
        return " | ".join(segments)

    def _plan_message(self, plan: DrawPlan, width: int, height: int) -> None:
        message = self.editor.message
        y = height - self.editor.bar_height - 1
        if not message or y < 0:
            return
        text = truncate_string(displayable(message), width)
        plan.runs.append(TextRun(0, y, text, self.colors.message, self.colors.text_bg))

    def box_geometry(self, width: int, height: int) -> tuple[int, int, int, int]:
        """Returns ``(start_x, start_y, box_width, box_height)`` of the command box."""
        box = self.config.command_box
        box_width = box.width if box.width else max(MIN_BOX_WIDTH, min(MAX_BOX_WIDTH, int(width * 0.6)))
        box_height = box.height if box.height else DEFAULT_BOX_HEIGHT
        box_width = min(box_width, width)
        box_height = min(box_height, height)
        start_x = (width - box_width) // 2
        start_y = (height - box_height) // 2
        return start_x, start_y, box_width, box_height

    def _plan_command_box(self, plan: DrawPlan, width: int, height: int) -> CursorPlacement:
        start_x, start_y, box_width, box_height = self.box_geometry(width, height)
        prompt = ":" + displayable(self.editor.command_input)

        if box_width < 3 or box_height < 3:
            # No room for a frame; keep the prompt on the last screen row
            text = truncate_string(prompt, width)
            plan.runs.append(TextRun(0, height - 1, text, self.colors.box_text, self.colors.box_primary))
            return CursorPlacement(min(get_string_width(text), width - 1), height - 1, CursorShape.BAR)

        inner = box_width - 2
        border, text_fg = self.colors.box_border, self.colors.box_text
        bgs = gradient(self.colors.box_primary, self.colors.box_secondary, box_width, box_width)
        label = truncate_string(self.config.command_box.text or DEFAULT_BOX_LABEL, inner)
        label_w = get_string_width(label)
        left = (inner - label_w) // 2
        prompt_row = min(2, box_height - 2)
        message_row = prompt_row + 1
        message = displayable(self.editor.message)

        for r in range(box_height):
            y = start_y + r
            if r == 0:
                spans = [
                    ("┌" + "─" * left, border),
                    (label, text_fg),
                    ("─" * (inner - left - label_w) + "┐", border),
                ]
            elif r == box_height - 1:
                spans = [("└" + "─" * inner + "┘", border)]
            else:
                if r == prompt_row:
                    content = prompt
                elif r == message_row and message:
                    content = message
                else:
                    content = ""
                spans = [("│", border), (pad_to_width(content, inner), text_fg), ("│", border)]
            plan.runs.extend(_row_runs(start_x, y, spans, bgs))

        cursor_x = start_x + 1 + min(get_string_width(prompt), inner - 1)
        return CursorPlacement(cursor_x, start_y + prompt_row, CursorShape.BAR)

    def _text_cursor(self, width: int, height: int, text_area_height: int) -> CursorPlacement:
        buffer = self.editor.buffer
        line = buffer.lines[buffer.cursor_y]
        x = get_string_width(displayable(line[: buffer.cursor_x]))
        y = buffer.cursor_y - self.editor.viewport.offset
        x = max(0, min(x, width - 1))
        y = max(0, min(y, text_area_height - 1, height - 1))
        shape = CursorShape.BAR if self.editor.mode is Mode.INSERT else CursorShape.BLOCK
        return CursorPlacement(x, y, shape)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def draw(self, terminal: "Terminal") -> None:
        """Plans a frame for the current terminal size and paints it."""
        width, height = terminal.size()
        plan = self.plan(width, height)
        logging.debug(f"DrawScreen: {len(plan.runs)} runs for {width}x{height}, cursor {plan.cursor}")

        terminal.clear()
        for run in plan.runs:
            terminal.set_foreground(run.fg)
            terminal.set_background(run.bg)
            terminal.write_at(run.x, run.y, run.text)
        terminal.set_cursor_shape(plan.cursor.shape)
        terminal.move_cursor(plan.cursor.x, plan.cursor.y)
        terminal.flush()


def _row_runs(
    x0: int,
    y: int,
    spans: list[tuple[str, Optional[Color]]],
    bgs: list[Optional[Color]],
) -> list[TextRun]:
    """Splits one row into runs of equal foreground and background.

    *bgs* gives the background of each column relative to *x0*; a wide
    character takes the background of its first cell.
    """
    runs: list[TextRun] = []
    x = x0
    cur_text: list[str] = []
    cur_x = x0
    cur_key: Optional[tuple[Optional[Color], Optional[Color]]] = None

    for text, fg in spans:
        for ch in text:
            col = x - x0
            bg = bgs[col] if 0 <= col < len(bgs) else (bgs[-1] if bgs else None)
            key = (fg, bg)
            if key != cur_key and cur_text:
                runs.append(TextRun(cur_x, y, "".join(cur_text), *cur_key))
                cur_text = []
            if not cur_text:
                cur_x, cur_key = x, key
            cur_text.append(ch)
            x += char_width(ch)

    if cur_text and cur_key is not None:
        runs.append(TextRun(cur_x, y, "".join(cur_text), *cur_key))
    return runs
