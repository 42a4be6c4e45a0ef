"""Main entry point for task-cli.

Supports both direct invocation (`python -m task_cli`) and package entry point.
"""

from task_cli.cli import cli

if __name__ == "__main__":
    cli()
