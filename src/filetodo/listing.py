"""Completed/uncompleted views over the stored todos."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from .repository import TodoRepository
from .todo import Todo


def partition(todos: Iterable[Todo]) -> Tuple[List[Todo], List[Todo]]:
    """Split into ``(completed, uncompleted)``, keeping input order in each."""
    completed: List[Todo] = []
    uncompleted: List[Todo] = []
    for todo in todos:
        (completed if todo.completed else uncompleted).append(todo)
    return completed, uncompleted


def render(todos: List[Todo], label: str, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    out.write(f"{len(todos)} {label} todos:\n")
    for todo in todos:
        out.write(todo.line() + "\n")


def list_todos(
    repository: TodoRepository,
    include_uncompleted: bool,
    include_completed: bool,
    out: Optional[TextIO] = None,
) -> None:
    out = out or sys.stdout
    completed, uncompleted = partition(repository.enumerate_all())
    if include_uncompleted:
        render(uncompleted, "uncompleted", out)
    if include_uncompleted and include_completed:
        out.write("\n")
    if include_completed:
        render(completed, "completed", out)
