"""Data structures and helpers for the task-cli package.

This module contains:
- Data classes: Task
- Constants: Status, TASKS_FILENAME, DEPRECATED_STATUS_ALIASES
- Identifier and timestamp parsing helpers
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from ulid import ULID

# =============================================================================
# Constants
# =============================================================================

TASKS_FILENAME = ".tasks.json"


class Status(str, Enum):
    """Lifecycle stage of a task.

    The value is the keyword used everywhere outside the program: CLI input,
    ``list`` output, and the tasks file.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def keywords(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def from_keyword(cls, keyword: str) -> "Status":
        """Parse a status keyword, raising ValueError if it is unknown."""
        try:
            return cls(keyword)
        except ValueError:
            raise ValueError(
                f"invalid status '{keyword}' (expected one of: {', '.join(cls.keywords())})"
            ) from None


# Status keywords written by older versions of the tool
# Used by normalize_status() when reading existing task files
DEPRECATED_STATUS_ALIASES: dict[str, str] = {
    "to-do": "todo",
}


def normalize_status(status: str) -> str:
    """Normalize deprecated status aliases to their canonical form.

    Args:
        status: The status string to normalize

    Returns:
        The canonical status (or original if already canonical/unknown)

    Examples:
        >>> normalize_status("to-do")
        'todo'
        >>> normalize_status("done")
        'done'
    """
    return DEPRECATED_STATUS_ALIASES.get(status, status)


def default_tasks_path() -> Path:
    """Get the default tasks file location in the user's home directory."""
    return Path.home() / TASKS_FILENAME


# =============================================================================
# Identifiers and timestamps
# =============================================================================


def parse_task_id(value: str) -> ULID:
    """Parse a task ID from its string form (case-insensitive).

    Raises:
        ValueError: If the value is not a valid ULID
    """
    try:
        return ULID.from_str(value.strip().upper())
    except (ValueError, TypeError):
        raise ValueError(f"invalid id format: '{value}'") from None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Python's fromisoformat only understands up to microsecond precision
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC string with a Z suffix."""
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Accepts a trailing ``Z`` and sub-microsecond precision, which are both
    written by older versions of the tool. Naive timestamps are assumed UTC.

    Raises:
        ValueError: If the value is not a valid timestamp
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _EXTRA_FRACTION_RE.sub(r"\1", text)
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# =============================================================================
# Data classes
# =============================================================================


@dataclass
class Task:
    """A single tracked task.

    Attributes:
        id: ULID assigned at creation, never changes
        description: Free-form text supplied by the user
        status: Current lifecycle stage
        created_at: Creation time (UTC)
        updated_at: Time of the last change to description or status (UTC)
    """

    id: ULID
    description: str
    status: Status
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, description: str, now: Optional[datetime] = None) -> "Task":
        """Create a new task with a fresh ID and status todo."""
        now = now or utcnow()
        return cls(
            id=ULID(),
            description=description,
            status=Status.TODO,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from its JSON representation.

        Raises:
            ValueError: If a field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        missing = [
            key
            for key in ("id", "description", "status", "created_at", "updated_at")
            if key not in data
        ]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        if not isinstance(data["description"], str):
            raise ValueError("description must be a string")
        for key in ("id", "status", "created_at", "updated_at"):
            if not isinstance(data[key], str):
                raise ValueError(f"{key} must be a string")

        return cls(
            id=parse_task_id(data["id"]),
            description=data["description"],
            status=Status.from_keyword(normalize_status(data["status"])),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the task to a JSON-compatible dictionary."""
        return {
            "id": str(self.id),
            "description": self.description,
            "status": self.status.value,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    def __str__(self) -> str:
        """Return the one-line form used by `list`, like `<id>. <description> (<status>)`."""
        return f"{self.id}. {self.description} ({self.status})"
