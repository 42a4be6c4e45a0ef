#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.10"
# dependencies = [
#     "click>=8.0.0",
#     "rich>=13.0.0",
#     "python-ulid>=2.0.0",
# ]
# ///

"""Command-line interface for task-cli.

Every command loads the whole tasks file, applies one operation, and (for
everything except `list`) writes the whole file back, even if nothing changed.
Arguments are validated by click before the tasks file is read, so a bad
invocation never modifies it.
"""

import json
import logging
from pathlib import Path
from typing import List

import click
from rich.console import Console
from rich.markup import escape
from ulid import ULID

# Using absolute imports (not relative) for uv script compatibility
from task_cli.lib import (
    add_task,
    delete_tasks,
    filter_tasks,
    mark_task,
    update_task,
)
from task_cli.store import TaskStore, TaskStoreError
from task_cli.utils import (
    Status,
    Task,
    default_tasks_path,
    parse_task_id,
)

# Keep console instances for CLI output
console = Console()
err_console = Console(stderr=True)


class TaskIdParamType(click.ParamType):
    """Click parameter type for task IDs (ULIDs)."""

    name = "id"

    def convert(self, value, param, ctx):
        if isinstance(value, ULID):
            return value
        try:
            return parse_task_id(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


class StatusParamType(click.ParamType):
    """Click parameter type for status keywords: todo, in-progress, done."""

    name = "status"

    def convert(self, value, param, ctx):
        if isinstance(value, Status):
            return value
        try:
            return Status.from_keyword(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


TASK_ID = TaskIdParamType()
STATUS = StatusParamType()


class TaskGroup(click.Group):
    """Command group that answers unknown commands with the usage help."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption:
            if ctx.resilient_parsing:
                raise
            self._invalid_command(ctx)

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if (
            cmd_name is not None
            and not ctx.resilient_parsing
            and self.get_command(ctx, cmd_name) is None
        ):
            self._invalid_command(ctx)
        return super().resolve_command(ctx, args)

    @staticmethod
    def _invalid_command(ctx):
        click.echo("Invalid command")
        click.echo(ctx.get_help())
        ctx.exit(0)


def _load(store: TaskStore) -> List[Task]:
    try:
        return store.load()
    except TaskStoreError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]")
        raise SystemExit(1)


def _save(store: TaskStore, tasks: List[Task]) -> None:
    try:
        store.save(tasks)
    except TaskStoreError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]")
        raise SystemExit(1)


@click.group(name="task-cli", cls=TaskGroup, invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--tasks-file",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="TASK_CLI_FILE",
    help="Path to the tasks file (default: ~/.tasks.json). Can also be set via TASK_CLI_FILE env var.",
)
@click.pass_context
def cli(ctx, verbose, tasks_file):
    """Track short tasks from the command line.

    Statuses are todo, in-progress and done.
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    ctx.obj = TaskStore(tasks_file or default_tasks_path())


@cli.command("add", context_settings={"ignore_unknown_options": True})
@click.argument("description")
@click.pass_obj
def add(store: TaskStore, description: str):
    """Add a new task.

    Examples:
        task-cli add "buy milk"
    """
    tasks = _load(store)
    task = add_task(tasks, description)
    _save(store, tasks)
    console.print(f"[green]✓ Added task {task.id}[/]")


@cli.command("update", context_settings={"ignore_unknown_options": True})
@click.argument("task_id", type=TASK_ID)
@click.argument("description")
@click.pass_obj
def update(store: TaskStore, task_id: ULID, description: str):
    """Update the description of a task."""
    tasks = _load(store)
    task = update_task(tasks, task_id, description)
    _save(store, tasks)
    if task is None:
        console.print(f"[yellow]No task found with ID {task_id}[/]")
        return
    console.print(f"[green]✓ Updated task {task_id}:[/] {escape(task.description)}")


@cli.command("delete")
@click.argument("task_id", type=TASK_ID)
@click.pass_obj
def delete(store: TaskStore, task_id: ULID):
    """Delete a task."""
    tasks = _load(store)
    removed = delete_tasks(tasks, task_id)
    _save(store, tasks)
    if not removed:
        console.print(f"[yellow]No task found with ID {task_id}[/]")
        return
    console.print(f"[green]✓ Deleted task {task_id}[/]")


@cli.command("mark")
@click.argument("task_id", type=TASK_ID)
@click.argument("status", type=STATUS)
@click.pass_obj
def mark(store: TaskStore, task_id: ULID, status: Status):
    """Change the status of a task.

    STATUS is one of todo, in-progress, done.

    Examples:
        task-cli mark 01HZX3J8Q6Y1V0W6B4N7T2C9KD in-progress
    """
    tasks = _load(store)
    task = mark_task(tasks, task_id, status)
    _save(store, tasks)
    if task is None:
        console.print(f"[yellow]No task found with ID {task_id}[/]")
        return
    console.print(f"[green]✓ Marked task {task_id} as {status}[/]")


@cli.command("list")
@click.argument("status", type=STATUS, required=False)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON for machine consumption",
)
@click.pass_obj
def list_(store: TaskStore, status, output_json: bool):
    """List all tasks, or only those with STATUS.

    One line per task, in the order they were added:

        <id>. <description> (<status>)
    """
    tasks = filter_tasks(_load(store), status)

    if output_json:
        print(json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False))
        return

    for task in tasks:
        print(task)
