# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` render planner.
=================================================

`DrawScreen.plan` is pure, so these tests build editor states with the
`make_editor` fixture and inspect the resulting `DrawPlan` directly:

- text area rows, clipping and wide characters,
- the two-row mode bar (rule + status segments) and its gradient runs,
- the status message row,
- the centred command box and its geometry,
- cursor placement and shape,
- `draw()` executing a plan against a terminal.
"""

import random
from unittest.mock import MagicMock, call

from mote.core.ModeMachine import Mode
from mote.core.Mote import Mote
from mote.ui.Colors import parse_color
from mote.ui.DrawScreen import (
    CursorPlacement,
    CursorShape,
    DrawPlan,
    DrawScreen,
    TextRun,
    get_string_width,
    truncate_string,
)
from mote.utils.config import ColorsConfig, CommandBoxConfig, ModeBarConfig


def planner(editor: Mote) -> DrawScreen:
    return DrawScreen(editor, editor.config)


def row_text(plan: DrawPlan, y: int) -> str:
    """Text of the runs on row *y*, in column order."""
    return "".join(run.text for run in sorted(plan.runs, key=lambda r: r.x) if run.y == y)


# --- helpers ---
def test_truncate_string_respects_wide_characters() -> None:
    assert truncate_string("abcdefghij", 5) == "abcde"
    assert truncate_string("漢字漢字", 5) == "漢字"
    assert truncate_string("short", 50) == "short"
    assert truncate_string("abc", 0) == ""


def test_get_string_width() -> None:
    assert get_string_width("abc") == 3
    assert get_string_width("a漢b") == 4
    assert get_string_width("") == 0


# --- text area ---
def test_text_rows_and_mode_bar_layout(make_editor) -> None:
    editor = make_editor(["hello", "world"])
    plan = planner(editor).plan(20, 6)

    assert row_text(plan, 0) == "hello"
    assert row_text(plan, 1) == "world"
    assert row_text(plan, 2) == ""
    assert row_text(plan, 3) == ""
    assert row_text(plan, 4) == "─" * 20
    assert row_text(plan, 5) == "NORMAL | [No Name]  "


def test_long_lines_are_clipped_not_wrapped(make_editor) -> None:
    editor = make_editor(["x" * 50, "漢字漢字"])
    plan = planner(editor).plan(5, 6)
    assert row_text(plan, 0) == "xxxxx"
    assert row_text(plan, 1) == "漢字"
    assert row_text(plan, 2) == ""


def test_text_starts_at_viewport_offset(make_editor) -> None:
    editor = make_editor([f"line {i}" for i in range(10)], cursor=(0, 7))
    editor.viewport.offset = 5
    plan = planner(editor).plan(20, 6)
    assert [row_text(plan, r) for r in range(4)] == ["line 5", "line 6", "line 7", "line 8"]
    assert plan.cursor == CursorPlacement(0, 2, CursorShape.BLOCK)


def test_control_characters_are_shown_as_placeholders(make_editor) -> None:
    editor = make_editor(["a\tb"], cursor=(3, 0))
    plan = planner(editor).plan(20, 6)
    assert row_text(plan, 0) == "a?b"
    assert plan.cursor.x == 3


def test_background_colour_fills_text_rows(make_editor, config) -> None:
    config.colors = ColorsConfig(text="white", background="#101010")
    editor = make_editor(["ab"])
    plan = planner(editor).plan(6, 4)
    row0 = [run for run in plan.runs if run.y == 0]
    assert row0 == [TextRun(0, 0, "ab    ", parse_color("white"), parse_color("#101010"))]
    assert row_text(plan, 1) == "      "


# --- mode bar ---
def test_status_segments(make_editor) -> None:
    editor = make_editor(["abc"], filename="notes.txt", dirty=True)
    editor.mode = Mode.INSERT
    assert planner(editor).status_line() == "INSERT | notes.txt | [Modified]"

    editor.buffer.dirty = False
    assert planner(editor).status_line() == "INSERT | notes.txt"


def test_status_segments_can_be_hidden(make_editor, config) -> None:
    config.mode_bar = ModeBarConfig(show_mode=False)
    editor = make_editor(["abc"], filename="notes.txt", dirty=True)
    assert planner(editor).status_line() == "notes.txt | [Modified]"

    config.mode_bar = ModeBarConfig(show_mode=False, show_filename=False, show_dirty_indicator=False)
    assert planner(editor).status_line() == ""


def test_mode_bar_gradient_splits_runs_by_background(make_editor, config) -> None:
    config.mode_bar = ModeBarConfig(primary_color="#000000", secondary_color="#ffffff", width=2)
    editor = make_editor(["abc"])
    plan = planner(editor).plan(10, 5)

    rule_runs = [run for run in plan.runs if run.y == 3]
    black, white = parse_color("#000000"), parse_color("#ffffff")
    assert rule_runs == [
        TextRun(0, 3, "─", None, black),
        TextRun(1, 3, "─" * 9, None, white),
    ]


def test_mode_bar_gradient_defaults_to_terminal_width(make_editor, config) -> None:
    config.colors = ColorsConfig(status_bar_background="#000000")
    config.mode_bar = ModeBarConfig(secondary_color="#0000ff", text_color="white")
    editor = make_editor(["abc"])
    plan = planner(editor).plan(4, 5)
    status_runs = sorted((run for run in plan.runs if run.y == 4), key=lambda r: r.x)
    assert [run.bg.b for run in status_runs] == [0, 85, 170, 255]
    assert all(run.fg == parse_color("white") for run in status_runs)


def test_taller_mode_bar(make_editor, config) -> None:
    config.mode_bar = ModeBarConfig(height=3)
    editor = make_editor(["abc"])
    plan = planner(editor).plan(10, 8)
    assert row_text(plan, 5) == "─" * 10
    assert row_text(plan, 6) == " " * 10
    assert row_text(plan, 7).startswith("NORMAL")


# --- message ---
def test_message_drawn_above_mode_bar(make_editor) -> None:
    editor = make_editor(["abc"])
    editor.message = "File written"
    plan = planner(editor).plan(20, 6)
    assert row_text(plan, 3) == "File written"


def test_message_is_clipped(make_editor) -> None:
    editor = make_editor(["abc"])
    editor.message = "m" * 40
    plan = planner(editor).plan(10, 6)
    assert row_text(plan, 3) == "m" * 10


# --- command box ---
def test_command_box_layout(make_editor) -> None:
    editor = make_editor(["abc"])
    editor.mode = Mode.COMMAND
    editor.command_input = "wq"
    screen = planner(editor)
    plan = screen.plan(100, 30)

    assert screen.box_geometry(100, 30) == (20, 12, 60, 5)
    left = (58 - len(" Command box ")) // 2
    assert row_text(plan, 12) == "┌" + "─" * left + " Command box " + "─" * (58 - left - 13) + "┐"
    assert row_text(plan, 13) == "│" + " " * 58 + "│"
    assert row_text(plan, 14) == "│" + ":wq".ljust(58) + "│"
    assert row_text(plan, 16) == "└" + "─" * 58 + "┘"
    assert plan.cursor == CursorPlacement(24, 14, CursorShape.BAR)
    assert row_text(plan, 29).startswith("COMMAND")


def test_command_box_width_rule(make_editor) -> None:
    screen = planner(make_editor(["abc"]))
    assert screen.box_geometry(200, 30)[2] == 80
    assert screen.box_geometry(50, 30)[2] == 40
    # never wider than the terminal
    assert screen.box_geometry(30, 30)[:3] == (0, 12, 30)


def test_command_box_uses_configured_size_and_label(make_editor, config) -> None:
    config.command_box = CommandBoxConfig(width=50, height=7, text=" Cmd ")
    editor = make_editor(["abc"])
    editor.mode = Mode.COMMAND
    screen = planner(editor)
    assert screen.box_geometry(100, 30) == (25, 11, 50, 7)
    plan = screen.plan(100, 30)
    assert " Cmd " in row_text(plan, 11)


def test_command_prompt_is_clipped_and_cursor_stays_inside(make_editor) -> None:
    editor = make_editor(["abc"])
    editor.mode = Mode.COMMAND
    editor.command_input = "x" * 100
    plan = planner(editor).plan(40, 20)
    # box is 40 wide, inner area 38
    assert row_text(plan, 9) == "│:" + "x" * 37 + "│"
    assert plan.cursor == CursorPlacement(38, 9, CursorShape.BAR)


def test_command_box_colours(make_editor, config) -> None:
    config.colors = ColorsConfig(command_box_border="cyan", command_box_background="#202020")
    config.command_box = CommandBoxConfig(text_color="white")
    editor = make_editor(["abc"])
    editor.mode = Mode.COMMAND
    plan = planner(editor).plan(100, 30)
    bottom = [run for run in plan.runs if run.y == 16]
    assert bottom == [TextRun(20, 16, "└" + "─" * 58 + "┘", parse_color("cyan"), parse_color("#202020"))]
    prompt_runs = [run for run in plan.runs if run.y == 14]
    assert [run.fg for run in prompt_runs] == [parse_color("cyan"), parse_color("white"), parse_color("cyan")]


def test_no_message_row_above_bar_in_command_mode(make_editor) -> None:
    editor = make_editor([""])
    editor.mode = Mode.COMMAND
    editor.message = "note"
    plan = planner(editor).plan(100, 30)
    assert row_text(plan, 27) == ""
    assert row_text(plan, 15) == "│" + "note".ljust(58) + "│"


# --- cursor ---
def test_cursor_uses_display_width_and_mode_shape(make_editor) -> None:
    editor = make_editor(["a漢b"], cursor=(2, 0))
    plan = planner(editor).plan(20, 6)
    assert plan.cursor == CursorPlacement(3, 0, CursorShape.BLOCK)

    editor.mode = Mode.INSERT
    assert planner(editor).plan(20, 6).cursor.shape is CursorShape.BAR


def test_cursor_is_clamped_to_screen(make_editor) -> None:
    editor = make_editor(["x" * 50], cursor=(50, 0))
    plan = planner(editor).plan(20, 6)
    assert plan.cursor.x == 19


# --- degenerate sizes ---
def test_zero_size_gives_empty_plan(make_editor) -> None:
    plan = planner(make_editor(["abc"])).plan(0, 0)
    assert plan.runs == []


def test_random_states_stay_on_screen(make_editor) -> None:
    rng = random.Random(7)
    words = ["", "a", "hello world", "漢字かな", "x" * 120, "tab\there"]
    for _ in range(400):
        lines = [rng.choice(words) for _ in range(rng.randint(1, 30))]
        y = rng.randrange(len(lines))
        editor = make_editor(lines, cursor=(rng.randint(0, len(lines[y])), y), filename=rng.choice([None, "f.txt"]))
        editor.mode = rng.choice(list(Mode))
        editor.command_input = "w " + "p" * rng.randint(0, 90)
        editor.message = rng.choice(["", "saved", "m" * 200])
        width, height = rng.randint(1, 120), rng.randint(1, 50)
        editor.handle_resize(editor.text_area_height(height))

        plan = planner(editor).plan(width, height)

        for run in plan.runs:
            assert 0 <= run.y < height
            assert 0 <= run.x
            assert run.x + get_string_width(run.text) <= width
        assert 0 <= plan.cursor.x < width
        assert 0 <= plan.cursor.y < height


# --- draw ---
def test_draw_executes_plan_in_order(make_editor) -> None:
    editor = make_editor(["hi"])
    terminal = MagicMock()
    terminal.size.return_value = (20, 6)

    planner(editor).draw(terminal)

    names = [c[0] for c in terminal.mock_calls]
    assert names[:2] == ["size", "clear"]
    assert names[-3:] == ["set_cursor_shape", "move_cursor", "flush"]
    assert call.write_at(0, 0, "hi") in terminal.mock_calls
    assert call.write_at(0, 4, "─" * 20) in terminal.mock_calls
    terminal.move_cursor.assert_called_once_with(0, 0)
    terminal.set_cursor_shape.assert_called_once_with(CursorShape.BLOCK)
