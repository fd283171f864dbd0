# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

import models
import presenter
from cli import cli
from storage import TaskStore


@pytest.fixture(autouse=True)
def plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep listings free of ANSI codes even if FORCE_COLOR is set in the shell."""
    monkeypatch.setattr(presenter, "FORCE", False)


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(tasks_file: Path) -> TaskStore:
    return TaskStore(tasks_file)


@pytest.fixture()
def run(store: TaskStore):
    """Invoke the CLI against the per-test store and return the click Result."""
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args), obj=store)

    return _run


class FakeClock:
    """Deterministic replacement for models.utcnow; advances one minute per call."""

    def __init__(self, start: datetime) -> None:
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        self.calls += 1
        return value


@pytest.fixture()
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock(datetime(2026, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc))
    monkeypatch.setattr(models, "utcnow", fake)
    return fake
