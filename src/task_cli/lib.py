"""Core business logic for the task-cli package.

This module contains the operations behind each command. They work on an
in-memory list of tasks and never touch the tasks file.

Architecture:
- cli.py: Click commands, output formatting, loading and saving
- lib.py: Task mutations and queries
- store.py: Tasks file persistence
- utils.py: Data structures, parsing helpers
"""

import logging
from datetime import datetime
from typing import List, Optional

from ulid import ULID

from task_cli.utils import Status, Task, utcnow

logger = logging.getLogger(__name__)


def add_task(tasks: List[Task], description: str, now: Optional[datetime] = None) -> Task:
    """Create a new todo task and append it to the collection.

    Returns:
        The created task
    """
    task = Task.create(description, now=now)
    tasks.append(task)
    logger.debug("Task added id=%s", task.id)
    return task


def find_task(tasks: List[Task], task_id: ULID) -> Optional[Task]:
    """Return the first task with the given ID, or None."""
    return next((task for task in tasks if task.id == task_id), None)


def mark_task(
    tasks: List[Task], task_id: ULID, status: Status, now: Optional[datetime] = None
) -> Optional[Task]:
    """Set the status of the first task matching task_id.

    Returns:
        The updated task, or None if no task matched
    """
    task = find_task(tasks, task_id)
    if task is None:
        logger.debug("mark: no task with id=%s", task_id)
        return None
    task.status = status
    task.updated_at = now or utcnow()
    logger.debug("Task marked id=%s status=%s", task_id, status)
    return task


def update_task(
    tasks: List[Task], task_id: ULID, description: str, now: Optional[datetime] = None
) -> Optional[Task]:
    """Replace the description of the first task matching task_id.

    Returns:
        The updated task, or None if no task matched
    """
    task = find_task(tasks, task_id)
    if task is None:
        logger.debug("update: no task with id=%s", task_id)
        return None
    task.description = description
    task.updated_at = now or utcnow()
    logger.debug("Task updated id=%s", task_id)
    return task


def delete_tasks(tasks: List[Task], task_id: ULID) -> int:
    """Remove every task matching task_id, in place.

    Returns:
        Number of tasks removed
    """
    remaining = [task for task in tasks if task.id != task_id]
    removed = len(tasks) - len(remaining)
    tasks[:] = remaining
    logger.debug("Deleted %d task(s) with id=%s", removed, task_id)
    return removed


def filter_tasks(tasks: List[Task], status: Optional[Status] = None) -> List[Task]:
    """Return tasks with the given status (all tasks if status is None), in order."""
    if status is None:
        return list(tasks)
    return [task for task in tasks if task.status == status]
