"""JSON file persistence for the task collection.

The whole collection lives in one file, ``~/.tasks.json`` by default:

[
    {
        "id": "01HZX3J8Q6Y1V0W6B4N7T2C9KD",
        "description": "buy milk",
        "status": "todo",
        "created_at": "2026-01-19T18:00:00.123456Z",
        "updated_at": "2026-01-19T18:00:00.123456Z"
    }
]

It is read in full at the start of a command and rewritten in full at the end.
There is no locking: concurrent invocations are last-writer-wins.
"""

import contextlib
import json
import logging
from pathlib import Path
from typing import List, Union

from task_cli.utils import Task

logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Raised when the tasks file cannot be read, parsed or written."""


class TaskStore:
    """Loads and saves the full task collection."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Task]:
        """Load all tasks, in file order.

        A missing file is an empty collection (first run).

        Raises:
            TaskStoreError: If the file exists but is unreadable or invalid
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("No tasks file at %s, starting empty", self.path)
            return []
        except json.JSONDecodeError as e:
            raise TaskStoreError(f"Invalid JSON in tasks file {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise TaskStoreError(f"Could not read tasks file {self.path}: {e}") from e

        if not isinstance(data, list):
            raise TaskStoreError(
                f"Invalid tasks file {self.path}: expected a JSON array, got {type(data).__name__}"
            )

        tasks = []
        for i, item in enumerate(data):
            try:
                tasks.append(Task.from_dict(item))
            except ValueError as e:
                raise TaskStoreError(f"Invalid task at index {i} in {self.path}: {e}") from e

        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Replace the tasks file with the given collection.

        The document is written in one go to a temporary file next to the
        target, then renamed over it.

        Raises:
            TaskStoreError: If the file cannot be written
        """
        content = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            data = (content + "\n").encode("utf-8")
        except UnicodeEncodeError as e:
            raise TaskStoreError(f"Could not encode tasks for {self.path}: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(data)
            temp_path.replace(self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            raise TaskStoreError(f"Could not write tasks file {self.path}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(tasks), self.path)
