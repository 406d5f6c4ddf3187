"""Exceptions raised by the todo storage layer."""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for all filetodo errors."""


class TodoNotFoundError(TodoError, LookupError):
    def __init__(self, todo_id: int) -> None:
        super().__init__(f"todo {todo_id} not found")
        self.todo_id = todo_id


class TodoDeleteError(TodoError):
    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(f"{path}: {error}")
        self.path = path
        self.error = error


class StorageFatalError(TodoError):
    """The storage environment is unusable and the session must end.

    Raised when the working directory cannot be resolved, when a todo file
    cannot be opened for writing, or when the todos directory cannot be
    listed. The repository never exits the process itself; the command line
    entry point decides that.
    """
