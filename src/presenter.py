"""Console rendering for task listings."""
from typing import Iterable, List

import click

from models import Task, format_timestamp
from theme import FORCE, SEPARATOR_COLOR, STATUS_COLOR, color

SEPARATOR = '-' * 20
EMPTY_MESSAGE = 'No tasks found.'


def format_task(task: Task) -> List[str]:
    status = color(task.status, STATUS_COLOR.get(task.status, ''))
    return [
        f'ID: {task.id}',
        f'Description: {task.description}',
        f'Status: {status}',
        f'CreatedAt: {format_timestamp(task.created_at)}',
        f'UpdatedAt: {format_timestamp(task.updated_at)}',
        color(SEPARATOR, SEPARATOR_COLOR),
    ]


def print_tasks(tasks: Iterable[Task]) -> None:
    tasks = list(tasks)
    # None lets click decide from the terminal
    use_color = True if FORCE else None
    if not tasks:
        click.echo(EMPTY_MESSAGE)
        return
    for task in tasks:
        for line in format_task(task):
            click.echo(line, color=use_color)
