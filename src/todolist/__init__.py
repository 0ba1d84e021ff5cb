"""todolist - a small single-user task tracker."""

__version__ = "0.1.0"

from todolist.errors import StorageError, TodoError
from todolist.models import Task
from todolist.store import TaskStore

__all__ = [
    "StorageError",
    "Task",
    "TaskStore",
    "TodoError",
    "__version__",
]
