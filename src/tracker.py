"""Task list logic: ID management, lookup, mutation and status filtering.

Tasks are kept in insertion order; nothing here reorders them.
"""
import re
from typing import Iterable, List, Optional

from models import STATUSES, Task

_ID_RE = re.compile(r"\+?[0-9]+")
# same ceiling as a signed 32-bit id
MAX_TASK_ID = 2**31 - 1


class TaskNotFoundError(KeyError):
    def __init__(self, task_id: int):
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f'Task with ID {self.task_id} not found.'


def parse_task_id(raw: str) -> Optional[int]:
    """Return the id for a positive integer literal, None for anything else."""
    text = raw.strip()
    if not _ID_RE.fullmatch(text):
        return None
    try:
        value = int(text)
    except ValueError:
        # longer than the interpreter's int digit limit
        return None
    return value if 1 <= value <= MAX_TASK_ID else None


class TaskList:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self.tasks: List[Task] = list(tasks or [])

    # -------------------- id management --------------------
    def next_id(self) -> int:
        if not self.tasks:
            return 1
        return max(t.id for t in self.tasks) + 1

    # -------------------- queries --------------------
    def get(self, task_id: int) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def filter_by_status(self, status: Optional[str] = None) -> List[Task]:
        """All tasks when status is None, otherwise only those with that status."""
        if status is None:
            return list(self.tasks)
        if status not in STATUSES:
            raise ValueError(f'Invalid status: {status}')
        return [t for t in self.tasks if t.status == status]

    # -------------------- task operations --------------------
    def add(self, description: str) -> Task:
        task = Task(id=self.next_id(), description=description, status='todo')
        self.tasks.append(task)
        return task

    def update_description(self, task_id: int, description: str) -> Task:
        task = self.get(task_id)
        task.description = description
        task.touch()
        return task

    def set_status(self, task_id: int, status: str) -> Task:
        if status not in STATUSES:
            raise ValueError(f'Invalid status: {status}')
        task = self.get(task_id)
        task.status = status
        task.touch()
        return task

    def remove(self, task_id: int) -> Task:
        task = self.get(task_id)
        self.tasks.remove(task)
        return task
