"""Exceptions raised by todolist."""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for todolist errors."""


class StorageError(TodoError):
    """Writing the task file failed.

    The previous file contents and the in-memory tasks are left as they were.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
