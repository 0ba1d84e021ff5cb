"""Task store - the ordered task collection and its JSON file.

Every mutating operation rewrites the whole file. Writes go to a sibling
temp file that is then moved over the original, so a failed save never
leaves a truncated file behind.

Title lookups are case-insensitive exact matches. ``update`` and
``mark_complete`` touch only the first matching task, while ``delete``
removes every match.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
from collections.abc import Iterator
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from todolist.errors import StorageError
from todolist.models import Task

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class TaskStore:
    """In-memory task list backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.tasks: list[Task] = []

    @classmethod
    def open(cls, path: str | Path) -> TaskStore:
        """Create a store for ``path`` and load whatever is saved there."""
        store = cls(path)
        store.load()
        return store

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    # ---- persistence ----

    def load(self) -> list[Task]:
        """Load tasks from disk, replacing the in-memory list.

        A missing file is a first run and yields an empty list. A file that
        cannot be read or parsed also yields an empty list, but is logged
        and copied aside so the next save does not destroy it.
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            self.tasks = []
            return self.tasks

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self.tasks = _parse_tasks(data)
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("Could not read task file %s: %s", self.path, e)
            self._preserve_unreadable()
            self.tasks = []
            return self.tasks

        logger.debug("Loaded %d tasks from %s", len(self.tasks), self.path)
        return self.tasks

    def save(self) -> None:
        """Write all tasks to disk, replacing the file atomically.

        Raises:
            StorageError: the file could not be written. The previous file
                and the in-memory tasks are unchanged.
        """
        data = {
            "version": FORMAT_VERSION,
            "tasks": [task.model_dump(mode="json") for task in self.tasks],
        }
        tmp = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            logger.error("Failed to save tasks to %s: %s", self.path, e)
            raise StorageError(self.path, str(e)) from e

        logger.debug("Saved %d tasks to %s", len(self.tasks), self.path)

    def _preserve_unreadable(self) -> None:
        backup = self.path.with_name(self.path.name + ".corrupt")
        try:
            shutil.copy2(self.path, backup)
        except OSError as e:
            logger.warning("Could not back up %s: %s", self.path, e)
            return
        logger.warning("Unreadable task file copied to %s", backup)

    # ---- queries ----

    def find(self, title: str) -> Task | None:
        """Return the first task whose title matches, or None."""
        for task in self.tasks:
            if task.matches(title):
                return task
        return None

    def list_tasks(self, completed: bool) -> list[Task]:
        """Return a snapshot of pending or completed tasks, earliest due first.

        The sort is stable, so tasks due on the same day keep their order.
        """
        selected = [task for task in self.tasks if task.isComplete == completed]
        selected.sort(key=lambda t: t.dueDate)
        return [task.model_copy() for task in selected]

    # ---- mutations ----

    def add(self, title: str, description: str, priority: str, due_date: date) -> Task:
        """Append a new pending task and save."""
        task = Task(
            title=title,
            description=description,
            priority=priority,
            dueDate=due_date,
        )
        self.tasks.append(task)
        logger.info("Added task %r", title)
        self.save()
        return task

    def update(
        self,
        title: str,
        new_title: str,
        new_description: str,
        new_priority: str,
        new_due_date: date,
    ) -> bool:
        """Overwrite the first matching task's fields and save.

        The completion flag is left alone. Returns False (and does not save)
        when no task matches.
        """
        task = self.find(title)
        if task is None:
            logger.info("Update: task %r not found", title)
            return False

        task.title = new_title
        task.description = new_description
        task.priority = new_priority
        task.dueDate = new_due_date
        logger.info("Updated task %r", title)
        self.save()
        return True

    def delete(self, title: str) -> int:
        """Remove every matching task and save. Returns how many were removed."""
        before = len(self.tasks)
        self.tasks = [task for task in self.tasks if not task.matches(title)]
        removed = before - len(self.tasks)
        logger.info("Deleted %d task(s) titled %r", removed, title)
        self.save()
        return removed

    def mark_complete(self, title: str) -> bool:
        """Mark the first matching task complete and save.

        Returns False (and does not save) when no task matches.
        """
        task = self.find(title)
        if task is None:
            logger.info("Complete: task %r not found", title)
            return False

        task.mark_complete()
        logger.info("Completed task %r", title)
        self.save()
        return True


def _parse_tasks(data: object) -> list[Task]:
    """Build tasks from a decoded task file.

    Accepts the versioned document (``{"version": 1, "tasks": [...]}``) or a
    bare list of task objects.
    """
    if isinstance(data, dict):
        if "tasks" not in data:
            raise ValueError("missing 'tasks' array")
        items = data["tasks"]
    elif isinstance(data, list):
        items = data
    else:
        raise ValueError("expected a JSON object or array")

    if not isinstance(items, list):
        raise ValueError("'tasks' must be a JSON array")

    try:
        return [Task.model_validate(item) for item in items]
    except ValidationError as e:
        raise ValueError(f"invalid task record: {e.error_count()} error(s)") from e
