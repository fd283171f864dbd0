"""Color & style helpers for task listings.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Styled text goes through click.echo, which strips codes when stdout is not
  a TTY; FORCE_COLOR=1 keeps them anyway.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or a .env file in the working
  directory (TASK_CLI_TODO, TASK_CLI_INPROGRESS, TASK_CLI_DONE).
"""
from __future__ import annotations
import os
from typing import Optional

from config import env_value, read_env_file

FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)


def _palette(name: str, default: str, overrides: dict[str, str]) -> str:
    value: Optional[str] = env_value(name, None, overrides)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return default


RESET = _code('0')
DIM = _code('2')

HEX_TODO_DEFAULT = '#48B3AF'
HEX_INPROGRESS_DEFAULT = '#F6FF99'
HEX_DONE_DEFAULT = '#A7E399'

try:
    _ENV_OVERRIDES = read_env_file('.env')
except (OSError, UnicodeDecodeError):
    _ENV_OVERRIDES = {}

HEX_TODO = _palette('TASK_CLI_TODO', HEX_TODO_DEFAULT, _ENV_OVERRIDES)
HEX_INPROGRESS = _palette('TASK_CLI_INPROGRESS', HEX_INPROGRESS_DEFAULT, _ENV_OVERRIDES)
HEX_DONE = _palette('TASK_CLI_DONE', HEX_DONE_DEFAULT, _ENV_OVERRIDES)

STATUS_COLOR = {
    'todo': _from_hex(HEX_TODO),
    'in-progress': _from_hex(HEX_INPROGRESS),
    'done': _from_hex(HEX_DONE),
}

SEPARATOR_COLOR = DIM


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET


__all__ = ['color', 'FORCE', 'STATUS_COLOR', 'SEPARATOR_COLOR']
