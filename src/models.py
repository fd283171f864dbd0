"""Data models for the task tracker.

Exposes the Task dataclass plus the timestamp helpers used to persist it.
Statuses are stored as plain strings ("todo", "in-progress", "done") so the
JSON file stays readable and matches what the CLI accepts.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple

STATUSES: Tuple[str, ...] = ("todo", "in-progress", "done")

# fromisoformat on older interpreters only takes 3 or 6 fraction digits
_FRACTION_RE = re.compile(r"\.(\d+)")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Round-trip ISO-8601 text for a timestamp (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='microseconds')


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Raises ValueError on anything that isn't a timestamp.
    """
    if not isinstance(text, str):
        raise ValueError(f"timestamp must be a string, got {type(text).__name__}")
    raw = text.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    raw = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], raw)
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Task:
    """A single tracked task.

    Fields:
        id: Positive integer, unique within the store.
        description: Free text, a single line in practice.
        status: One of: "todo", "in-progress", "done".
        created_at: UTC timestamp of creation.
        updated_at: UTC timestamp of the last change (never before created_at).
    """
    id: int
    description: str
    status: str = "todo"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = utcnow()
        if self.updated_at is None:
            self.updated_at = self.created_at

    def touch(self) -> None:
        now = utcnow()
        # clock skew must not push updatedAt before createdAt
        self.updated_at = max(now, self.created_at) if self.created_at else now

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'description': self.description,
            'status': self.status,
            'createdAt': format_timestamp(self.created_at),
            'updatedAt': format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        """Build a Task from its persisted form.

        Keys are matched case-insensitively. Raises ValueError when a field
        is missing or has the wrong shape.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"task entry must be an object, got {type(raw).__name__}")
        fields = {str(k).lower(): v for k, v in raw.items()}
        for key in ('id', 'description', 'status', 'createdat', 'updatedat'):
            if key not in fields:
                raise ValueError(f"task entry is missing '{key}'")

        tid = fields['id']
        # bool is an int subclass; reject it explicitly
        if isinstance(tid, bool) or not isinstance(tid, int) or tid < 1:
            raise ValueError(f"invalid task id: {tid!r}")
        description = fields['description']
        if not isinstance(description, str):
            raise ValueError(f"task {tid}: description must be a string")
        status = fields['status']
        if status not in STATUSES:
            raise ValueError(f"task {tid}: unknown status {status!r}")

        return cls(
            id=tid,
            description=description,
            status=status,
            created_at=parse_timestamp(fields['createdat']),
            updated_at=parse_timestamp(fields['updatedat']),
        )

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, description={self.description}, status={self.status})"
