"""Data models for todolist."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

# Suggested priorities; any text is accepted.
PRIORITIES: tuple[str, ...] = ("High", "Medium", "Low")


class Task(BaseModel):
    """A single to-do item.

    Field names match the keys written to the task file.
    """

    title: str
    description: str = ""
    priority: str = "Medium"
    dueDate: date
    isComplete: bool = False

    def matches(self, title: str) -> bool:
        """Case-insensitive exact title comparison (no trimming)."""
        return self.title.casefold() == title.casefold()

    def mark_complete(self) -> None:
        """Mark the task as completed."""
        self.isComplete = True

    def __str__(self) -> str:
        completed = "Yes" if self.isComplete else "No"
        return (
            f"Task [Title='{self.title}', Priority='{self.priority}', "
            f"Due Date={self.dueDate.isoformat()}, Completed={completed}]"
        )
