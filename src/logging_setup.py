"""Logging configuration for the command-line entry point."""
from __future__ import annotations
import logging
import sys
from typing import Union

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    # getLevelName returns "Level X" for unknown names
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send log records to stderr so they never mix with command output.

    Call this ONCE, before the first command runs.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
