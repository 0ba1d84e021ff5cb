"""Tests for todolist.models module."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from todolist.models import PRIORITIES, Task


class TestTask:
    """Tests for the Task model."""

    def test_defaults(self) -> None:
        """Test a new task starts pending."""
        task = Task(title="Buy milk", dueDate=date(2024, 1, 1))
        assert task.description == ""
        assert task.priority == "Medium"
        assert task.isComplete is False

    def test_due_date_parsed_from_iso_string(self) -> None:
        """Test ISO date strings are accepted for dueDate."""
        task = Task.model_validate({"title": "Buy milk", "dueDate": "2024-03-15"})
        assert task.dueDate == date(2024, 3, 15)

    def test_missing_due_date_rejected(self) -> None:
        """Test dueDate is required."""
        with pytest.raises(ValidationError):
            Task.model_validate({"title": "Buy milk"})

    def test_priority_is_free_text(self) -> None:
        """Test priorities outside the suggested set are kept as-is."""
        task = Task(title="x", priority="Whenever", dueDate=date(2024, 1, 1))
        assert task.priority == "Whenever"
        assert "Whenever" not in PRIORITIES

    def test_dump_uses_file_field_names(self) -> None:
        """Test serialised keys and ISO date format."""
        task = Task(title="Buy milk", priority="High", dueDate=date(2024, 3, 15))
        assert task.model_dump(mode="json") == {
            "title": "Buy milk",
            "description": "",
            "priority": "High",
            "dueDate": "2024-03-15",
            "isComplete": False,
        }


class TestMatches:
    """Tests for title matching."""

    def test_case_insensitive(self) -> None:
        """Test matching ignores case."""
        task = Task(title="Buy Milk", dueDate=date(2024, 1, 1))
        assert task.matches("buy milk")
        assert task.matches("BUY MILK")

    def test_no_trimming(self) -> None:
        """Test surrounding whitespace is significant."""
        task = Task(title="Buy milk", dueDate=date(2024, 1, 1))
        assert not task.matches(" Buy milk")
        assert not task.matches("Buy milk ")

    def test_no_partial_match(self) -> None:
        """Test substrings do not match."""
        task = Task(title="Buy milk", dueDate=date(2024, 1, 1))
        assert not task.matches("Buy")
        assert not task.matches("Buy milk today")


class TestMarkComplete:
    """Tests for mark_complete."""

    def test_sets_flag(self) -> None:
        """Test marking a task as complete."""
        task = Task(title="x", dueDate=date(2024, 1, 1))
        task.mark_complete()
        assert task.isComplete is True

    def test_idempotent(self) -> None:
        """Test marking twice leaves it complete."""
        task = Task(title="x", dueDate=date(2024, 1, 1))
        task.mark_complete()
        task.mark_complete()
        assert task.isComplete is True


class TestStr:
    """Tests for the one-line summary."""

    def test_pending(self) -> None:
        """Test summary of a pending task."""
        task = Task(title="Buy milk", priority="High", dueDate=date(2024, 3, 15))
        assert str(task) == (
            "Task [Title='Buy milk', Priority='High', Due Date=2024-03-15, Completed=No]"
        )

    def test_completed(self) -> None:
        """Test summary of a completed task."""
        task = Task(title="Buy milk", priority="Low", dueDate=date(2024, 3, 15), isComplete=True)
        assert str(task).endswith("Completed=Yes]")
