"""Pytest configuration for task-cli tests."""

from datetime import datetime, timezone

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner"""
    return CliRunner()


@pytest.fixture
def tasks_file(tmp_path, monkeypatch):
    """Point the CLI at a tasks file inside the test's temporary directory."""
    path = tmp_path / ".tasks.json"
    monkeypatch.setenv("TASK_CLI_FILE", str(path))
    return path


@pytest.fixture
def fixed_now():
    """A fixed UTC instant for deterministic timestamps."""
    return datetime(2026, 1, 19, 18, 0, 0, 123456, tzinfo=timezone.utc)
