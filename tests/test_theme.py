# tests/test_theme.py

from __future__ import annotations

import importlib
from pathlib import Path

import pytest

import presenter
import theme
from models import Task

COLOR_VARS = (
    "NO_COLOR",
    "FORCE_COLOR",
    "COLORTERM",
    "TASK_CLI_TODO",
    "TASK_CLI_INPROGRESS",
    "TASK_CLI_DONE",
)

TODO_TRUECOLOR = "\x1b[38;2;72;179;175m"
RESET = "\x1b[0m"


@pytest.fixture()
def reload_theme(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """
    Re-import theme (and presenter, which copies its names) under the
    current environment; the originals are restored afterwards.
    """
    for name in COLOR_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    def _reload():
        importlib.reload(theme)
        importlib.reload(presenter)
        return theme

    yield _reload

    monkeypatch.undo()
    importlib.reload(theme)
    importlib.reload(presenter)


def test_truecolor_status_and_dim_separator(reload_theme, monkeypatch) -> None:
    monkeypatch.setenv("COLORTERM", "truecolor")
    t = reload_theme()
    assert t.STATUS_COLOR["todo"] == TODO_TRUECOLOR

    lines = presenter.format_task(Task(id=1, description="a"))
    assert lines[2] == f"Status: {TODO_TRUECOLOR}todo{RESET}"
    assert lines[5] == "\x1b[2m" + "-" * 20 + RESET
    assert "\x1b" not in lines[1]


def test_256_color_fallback_without_truecolor(reload_theme) -> None:
    t = reload_theme()
    # #48B3AF -> cube (1, 4, 3)
    assert t.STATUS_COLOR["todo"] == "\x1b[38;5;79m"


def test_no_color_disables_all_codes(reload_theme, monkeypatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("COLORTERM", "truecolor")
    t = reload_theme()
    assert set(t.STATUS_COLOR.values()) == {""}

    lines = presenter.format_task(Task(id=1, description="a", status="done"))
    assert lines[2] == "Status: done"
    assert lines[5] == "-" * 20


def test_palette_override_from_environment(reload_theme, monkeypatch) -> None:
    monkeypatch.setenv("COLORTERM", "truecolor")
    monkeypatch.setenv("TASK_CLI_DONE", "#FF0000")
    t = reload_theme()
    assert t.HEX_DONE == "#FF0000"

    lines = presenter.format_task(Task(id=1, description="a", status="done"))
    assert lines[2] == f"Status: \x1b[38;2;255;0;0mdone{RESET}"


def test_palette_override_from_env_file(reload_theme, monkeypatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TASK_CLI_INPROGRESS=00ff00\nTASK_CLI_DONE=#0000FF\n", "utf-8")
    monkeypatch.setenv("TASK_CLI_DONE", "#123456")
    t = reload_theme()
    assert t.HEX_INPROGRESS == "#00ff00"
    # real environment wins over .env
    assert t.HEX_DONE == "#123456"


@pytest.mark.parametrize("bad", ["zzzzzz", "#12345", "#1234567", "red"])
def test_bad_hex_falls_back_to_default(reload_theme, monkeypatch, bad: str) -> None:
    monkeypatch.setenv("TASK_CLI_TODO", bad)
    t = reload_theme()
    assert t.HEX_TODO == t.HEX_TODO_DEFAULT == "#48B3AF"


def test_listing_is_plain_when_output_is_not_a_terminal(reload_theme, monkeypatch, run) -> None:
    monkeypatch.setenv("COLORTERM", "truecolor")
    reload_theme()
    run("add", "a")
    output = run("list").output
    assert "Status: todo\n" in output
    assert "\x1b" not in output


def test_force_color_keeps_codes_in_listing(reload_theme, monkeypatch, run) -> None:
    monkeypatch.setenv("COLORTERM", "truecolor")
    monkeypatch.setenv("FORCE_COLOR", "1")
    t = reload_theme()
    assert t.FORCE is True
    run("add", "a")
    output = run("list").output
    assert f"Status: {TODO_TRUECOLOR}todo{RESET}" in output
