"""Shared fixtures for todolist tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from todolist.store import TaskStore


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Path for a task file that does not exist yet."""
    return tmp_path / ".todo" / "tasks.json"


@pytest.fixture
def sample_tasks_data() -> dict:
    """Sample task file contents."""
    return {
        "version": 1,
        "tasks": [
            {
                "title": "Pay rent",
                "description": "Transfer to landlord",
                "priority": "High",
                "dueDate": "2024-02-01",
                "isComplete": False,
            },
            {
                "title": "Buy milk",
                "description": "Oat, 2 litres",
                "priority": "Medium",
                "dueDate": "2024-01-01",
                "isComplete": False,
            },
            {
                "title": "File taxes",
                "description": "",
                "priority": "Low",
                "dueDate": "2024-01-15",
                "isComplete": True,
            },
        ],
    }


@pytest.fixture
def populated_file(tasks_file: Path, sample_tasks_data: dict) -> Path:
    """Write the sample tasks to disk."""
    tasks_file.parent.mkdir(parents=True, exist_ok=True)
    tasks_file.write_text(json.dumps(sample_tasks_data))
    return tasks_file


@pytest.fixture
def store(tasks_file: Path) -> TaskStore:
    """An empty store backed by a temporary file."""
    return TaskStore.open(tasks_file)


@pytest.fixture
def populated_store(populated_file: Path) -> TaskStore:
    """A store loaded from the sample tasks."""
    return TaskStore.open(populated_file)
