"""Command dispatcher for task-cli.

Each command loads the store, validates its arguments, mutates the list,
saves it and prints a one-line result. Usage problems and unknown ids are
reported on stdout and leave the file untouched; every outcome exits 0.
"""
import logging
from typing import Optional, Tuple

import click

from config import get_settings
from models import STATUSES
from presenter import print_tasks
from storage import TaskStore
from tracker import TaskList, TaskNotFoundError, parse_task_id

logger = logging.getLogger(__name__)

USAGE_LINES = (
    'task-cli add "description"',
    'task-cli update <id> "new description"',
    'task-cli delete <id>',
    'task-cli mark-in-progress <id>',
    'task-cli mark-done <id>',
    'task-cli list [all|todo|in-progress|done]',
)

# every word after the command name is data, including "-x", "--help" and "--"
PASSTHROUGH = {'ignore_unknown_options': True, 'help_option_names': []}
RAW_ARGS = 'task_cli.raw_args'


def print_usage() -> None:
    click.echo("Usage:\n")
    for line in USAGE_LINES:
        click.echo(line)


class TaskCLI(click.Group):
    """Group that treats unknown commands as a usage hint, not an error."""

    def resolve_command(self, ctx, args):
        name = args[0]
        if ctx.token_normalize_func is not None:
            name = ctx.token_normalize_func(name)
        if self.get_command(ctx, name) is None:
            click.echo(f"Unknown command: {name}")
            print_usage()
            ctx.exit(0)
        # the option parser drops a bare "--", so keep the words as typed
        ctx.meta[RAW_ARGS] = tuple(args[1:])
        return super().resolve_command(ctx, args)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except (click.exceptions.Exit, click.exceptions.Abort, click.ClickException):
            raise
        except Exception as exc:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"Error: {exc}", err=True)
            return None


def _raw_args(parsed: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(click.get_current_context().meta.get(RAW_ARGS, parsed))


def _parse_id_or_report(raw: str) -> Optional[int]:
    task_id = parse_task_id(raw)
    if task_id is None:
        click.echo("Invalid id.")
    return task_id


@click.group(cls=TaskCLI, invoke_without_command=True,
             context_settings={'token_normalize_func': str.lower, 'ignore_unknown_options': True})
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track tasks in a local JSON file."""
    if ctx.invoked_subcommand is None:
        print_usage()
        return
    if ctx.obj is None:
        ctx.obj = TaskStore(get_settings().tasks_file)


# -------------------- commands --------------------
@cli.command('add', context_settings=PASSTHROUGH)
@click.argument('words', nargs=-1, metavar='DESCRIPTION...')
@click.pass_obj
def add_command(store: TaskStore, words: Tuple[str, ...]) -> None:
    """Add a new task with status "todo"."""
    description = ' '.join(_raw_args(words))
    if not description.strip():
        click.echo('Missing description. Usage: task-cli add "description"')
        return
    tasks = TaskList(store.load())
    task = tasks.add(description)
    store.save(tasks.tasks)
    click.echo(f"Task added successfully (ID: {task.id})")


@cli.command('update', context_settings=PASSTHROUGH)
@click.argument('args', nargs=-1, metavar='ID DESCRIPTION...')
@click.pass_obj
def update_command(store: TaskStore, args: Tuple[str, ...]) -> None:
    """Replace the description of a task."""
    args = _raw_args(args)
    if len(args) < 2:
        click.echo('Usage: task-cli update <id> "new description"')
        return
    task_id = _parse_id_or_report(args[0])
    if task_id is None:
        return
    tasks = TaskList(store.load())
    try:
        tasks.update_description(task_id, ' '.join(args[1:]))
    except TaskNotFoundError as exc:
        click.echo(str(exc))
        return
    store.save(tasks.tasks)
    click.echo(f"Task {task_id} updated.")


@cli.command('delete', context_settings=PASSTHROUGH)
@click.argument('args', nargs=-1, metavar='ID')
@click.pass_obj
def delete_command(store: TaskStore, args: Tuple[str, ...]) -> None:
    """Remove a task."""
    args = _raw_args(args)
    if not args:
        click.echo("Usage: task-cli delete <id>")
        return
    task_id = _parse_id_or_report(args[0])
    if task_id is None:
        return
    tasks = TaskList(store.load())
    try:
        tasks.remove(task_id)
    except TaskNotFoundError as exc:
        click.echo(str(exc))
        return
    store.save(tasks.tasks)
    click.echo(f"Task {task_id} deleted.")


def _mark(store: TaskStore, args: Tuple[str, ...], status: str) -> None:
    args = _raw_args(args)
    if not args:
        click.echo(f"Usage: task-cli mark-{status} <id>")
        return
    task_id = _parse_id_or_report(args[0])
    if task_id is None:
        return
    tasks = TaskList(store.load())
    try:
        tasks.set_status(task_id, status)
    except TaskNotFoundError as exc:
        click.echo(str(exc))
        return
    store.save(tasks.tasks)
    click.echo(f"Task {task_id} marked as {status}.")


@cli.command('mark-in-progress', context_settings=PASSTHROUGH)
@click.argument('args', nargs=-1, metavar='ID')
@click.pass_obj
def mark_in_progress_command(store: TaskStore, args: Tuple[str, ...]) -> None:
    """Set a task's status to "in-progress"."""
    _mark(store, args, 'in-progress')


@cli.command('mark-done', context_settings=PASSTHROUGH)
@click.argument('args', nargs=-1, metavar='ID')
@click.pass_obj
def mark_done_command(store: TaskStore, args: Tuple[str, ...]) -> None:
    """Set a task's status to "done"."""
    _mark(store, args, 'done')


@cli.command('list', context_settings=PASSTHROUGH)
@click.argument('args', nargs=-1, metavar='[all|todo|in-progress|done]')
@click.pass_obj
def list_command(store: TaskStore, args: Tuple[str, ...]) -> None:
    """Print tasks, optionally only those with one status."""
    args = _raw_args(args)
    tasks = TaskList(store.load())
    selected = args[0].lower() if args else 'all'
    if selected == 'all':
        print_tasks(tasks.filter_by_status())
        return
    if selected in STATUSES:
        print_tasks(tasks.filter_by_status(selected))
        return
    click.echo("Unknown list option. Use: all, todo, in-progress, done")
