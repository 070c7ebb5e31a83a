# tests/test_main.py
"""Tests for the `main.py` entry point: argument handling and exit codes."""

from unittest.mock import MagicMock, patch

import pytest

import main


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MOTE_CONFIG", str(tmp_path / "none.toml"))


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["main.py"], None),
        (["main.py", "  "], None),
        (["main.py", "notes.txt"], "notes.txt"),
    ],
)
def test_resolve_cli_path(argv, expected) -> None:
    assert main._resolve_cli_path(argv) == expected


def test_resolve_cli_path_expands_user(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert main._resolve_cli_path(["main.py", "~/a.txt"]) == str(tmp_path / "a.txt")


def test_start_runs_wrapper_and_returns_zero() -> None:
    with patch("main.curses.wrapper") as wrapper:
        assert main.start(["main.py", "file.txt"]) == 0
    runner, config, path = wrapper.call_args.args
    assert runner is main.main_app_runner
    assert config["mode bar"]["height"] == 2
    assert path == "file.txt"


def test_start_reports_fatal_errors() -> None:
    with patch("main.curses.wrapper", side_effect=RuntimeError("terminal gone")):
        assert main.start(["main.py"]) == 1


def test_main_app_runner_runs_editor_inside_terminal(tmp_path) -> None:
    stdscr = MagicMock()
    with (
        patch("main.Terminal") as terminal_cls,
        patch("main.Mote.run") as run,
        patch("main.signal.signal"),
    ):
        main.main_app_runner(stdscr, {"mode bar": {"height": 1}}, str(tmp_path / "x.txt"))

    terminal_cls.assert_called_once_with(stdscr)
    run.assert_called_once_with(terminal_cls.return_value.__enter__.return_value)
