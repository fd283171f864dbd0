"""Main entry point for task-cli."""
from typing import Optional, Sequence

from cli import cli
from config import get_settings
from logging_setup import setup_logging
from storage import TaskStore


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    store = TaskStore(settings.tasks_file)
    cli.main(args=list(argv) if argv is not None else None, prog_name='task-cli', obj=store)


if __name__ == "__main__":
    main()
