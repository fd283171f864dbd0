"""Settings resolved from the environment and an optional .env file.

Priority: real env var > .env in the working directory > default.
Only TASK_CLI_* keys are honoured from .env.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from storage import DEFAULT_TASKS_FILE

logger = logging.getLogger(__name__)

ENV_PREFIX = 'TASK_CLI_'
DEFAULT_LOG_LEVEL = 'WARNING'


def read_env_file(path: Union[str, Path]) -> Dict[str, str]:
    """Parse KEY=VALUE lines; blank lines and '#' comments are skipped."""
    path = Path(path)
    values: Dict[str, str] = {}
    if not path.is_file():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k.startswith(ENV_PREFIX):
            values[k] = v
    return values


def env_value(name: str, default: Optional[str] = None,
              overrides: Optional[Mapping[str, str]] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is not None and raw.strip():
        return raw.strip()
    if overrides and overrides.get(name):
        return overrides[name]
    return default


@dataclass(frozen=True)
class Settings:
    tasks_file: Path
    log_level: str


def get_settings(env_file: Union[str, Path] = '.env') -> Settings:
    try:
        overrides = read_env_file(env_file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable env file %s: %s", env_file, exc)
        overrides = {}
    tasks_file = env_value(ENV_PREFIX + 'FILE', DEFAULT_TASKS_FILE, overrides)
    log_level = env_value(ENV_PREFIX + 'LOG_LEVEL', DEFAULT_LOG_LEVEL, overrides)
    return Settings(
        tasks_file=Path(str(tasks_file)).expanduser(),
        log_level=str(log_level).upper(),
    )
