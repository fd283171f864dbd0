"""Persistence helpers (load/save) for the task list.

The whole list is read on every command and written back in full; there is
no locking, a single process is assumed to own the file.
"""
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, List, Union

from models import Task

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = 'tasks.json'


class TaskStore:
    def __init__(self, path: Union[str, Path] = DEFAULT_TASKS_FILE):
        self.path = Path(path)

    def load(self) -> List[Task]:
        """Load tasks from disk.

        Missing file -> created with an empty list first.
        Empty or whitespace-only file -> empty list.
        Unreadable or malformed file -> error is logged and an empty list is
        returned; this never raises for bad content.
        """
        try:
            if not self.path.exists():
                self.save([])
            text = self.path.read_text(encoding='utf-8')
            if not text.strip():
                return []
            return self._decode(json.loads(text))
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.error("Failed to read tasks file: %s", exc)
            return []

    def save(self, tasks: List[Task]) -> None:
        """Persist tasks to disk (pretty-printed), replacing the file in one step."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            tmp.write_text(payload + '\n', encoding='utf-8')
            os.replace(tmp, self.path)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        logger.debug("Saved %d tasks to %s", len(tasks), self.path)

    @staticmethod
    def _decode(data: Any) -> List[Task]:
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        tasks = [Task.from_dict(raw) for raw in data]
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id: {task.id}")
            seen.add(task.id)
        return tasks
