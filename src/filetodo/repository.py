"""One-file-per-todo storage."""

from __future__ import annotations

import os
import random
import re
from pathlib import Path
from typing import List, Optional

import structlog

from . import codec
from .config import Settings
from .errors import StorageFatalError, TodoDeleteError, TodoNotFoundError
from .todo import Todo

logger = structlog.get_logger(__name__)

TODOS_DIR = "todos"
ID_PATTERN = re.compile(r"[0-9]+")


def get_dir_path(dir_name: str = TODOS_DIR) -> Path:
    try:
        cwd = os.getcwd()
    except OSError as e:
        raise StorageFatalError(f"cannot resolve working directory: {e}") from e
    return Path(cwd) / dir_name


class TodoRepository:
    def __init__(
        self,
        root: Path,
        max_id: int = 1000,
        chunk_size: int = codec.DEFAULT_CHUNK_SIZE,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.root = Path(root)
        self.max_id = max_id
        self.chunk_size = chunk_size
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings) -> "TodoRepository":
        root = settings.storage_root or get_dir_path(settings.todos_dir)
        return cls(root, max_id=settings.max_id, chunk_size=settings.read_chunk_size)

    def path_for(self, todo_id: int) -> Path:
        return self.root / str(todo_id)

    def create(self, title: str) -> Todo:
        # Ids are not checked for collisions; a repeated id overwrites the old file.
        todo = Todo(id=self.rng.randrange(self.max_id), title=title)
        self.save(todo)
        return todo

    def load(self, todo_id: int) -> Todo:
        path = self.path_for(todo_id)
        try:
            with path.open("rb") as fh:
                completed, title = codec.read_record(fh, self.chunk_size)
        except OSError as e:
            raise TodoNotFoundError(todo_id) from e
        logger.debug("todo_loaded", id=todo_id, completed=completed)
        return Todo(id=todo_id, title=title, completed=completed)

    def save(self, todo: Todo) -> None:
        path = self.path_for(todo.id)
        try:
            fh = path.open("wb")
        except OSError as e:
            raise StorageFatalError(f"cannot create {path}: {e}") from e
        with fh:
            fh.write(codec.encode(todo))
        logger.debug("todo_saved", id=todo.id, completed=todo.completed)

    def delete(self, todo: Todo) -> None:
        path = self.path_for(todo.id)
        try:
            path.unlink()
        except OSError as e:
            logger.warning("todo_delete_failed", id=todo.id, error=str(e))
            raise TodoDeleteError(path, e) from e
        logger.debug("todo_deleted", id=todo.id)

    def enumerate_all(self) -> List[Todo]:
        """Load every todo in the directory, in directory listing order.

        Entries that are directories or whose names are not plain decimal
        numbers are ignored, as are files that vanish before they can be read.
        """
        try:
            with os.scandir(self.root) as it:
                entries = list(it)
        except OSError as e:
            raise StorageFatalError(f"cannot list {self.root}: {e}") from e

        todos: List[Todo] = []
        for entry in entries:
            if entry.is_dir():
                continue
            if not ID_PATTERN.fullmatch(entry.name):
                continue
            todo_id = int(entry.name)
            try:
                todos.append(self.load(todo_id))
            except TodoNotFoundError:
                logger.debug("todo_skipped", name=entry.name)
        return todos
