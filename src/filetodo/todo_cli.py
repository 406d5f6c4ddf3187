"""Simple interactive TODO CLI backed by one file per todo."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, Dict, List, Optional, TextIO

import structlog

from .config import get_settings
from .errors import StorageFatalError, TodoDeleteError, TodoNotFoundError
from .listing import list_todos
from .logging_config import configure_logging
from .repository import TodoRepository
from .todo import Todo

logger = structlog.get_logger(__name__)

BANNER = "Simple CLI TODO app"
HELP = (
    "Select action:\n"
    "1: List all TODOs\n"
    "2: Add new TODO\n"
    "3: Complete TODO\n"
    "4: Uncomplete TODO\n"
    "5: Delete TODO\n"
    "6: List completed TODOs\n"
    "7: List uncompleted TODOs\n"
    "8: Edit TODO\n"
    "9: Show this help\n"
    "0: Exit\n"
)
EXIT_ACTION = 0

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str) -> int:
    """Parse a decimal integer with an optional sign and nothing else."""
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f'parsing "{raw}": invalid syntax')
    return int(raw)


class TodoShell:
    def __init__(
        self,
        repository: TodoRepository,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.repository = repository
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.actions: Dict[int, Callable[[], None]] = {
            1: lambda: self.show_list(True, True),
            2: self.create,
            3: lambda: self.set_completed(True),
            4: lambda: self.set_completed(False),
            5: self.delete,
            6: lambda: self.show_list(True, False),
            7: lambda: self.show_list(False, True),
            8: self.edit,
            9: self.help,
        }

    def _print(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.stdout, flush=True)

    def _read_token(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EOFError
        parts: List[str] = line.split()
        return parts[0] if parts else ""

    def _read_title(self) -> str:
        return self.stdin.readline().strip("\n")

    def _select(self) -> Optional[Todo]:
        self._print("Select todo: ", end="")
        try:
            raw = self._read_token()
        except EOFError:
            raw = ""
        try:
            todo_id = parse_int(raw)
            if todo_id < 0:
                raise ValueError(f'id "{raw}" must not be negative')
        except ValueError as e:
            self._print(f"Error reading id: {e}")
            return None
        try:
            return self.repository.load(todo_id)
        except TodoNotFoundError:
            self._print("Todo not found")
            return None

    def help(self) -> None:
        self._print(HELP, end="")

    def show_list(self, include_uncompleted: bool, include_completed: bool) -> None:
        list_todos(self.repository, include_uncompleted, include_completed, self.stdout)

    def create(self) -> None:
        self._print("title: ", end="")
        todo = self.repository.create(self._read_title())
        self._print(f"Saved with id: {todo.id}")

    def set_completed(self, completed: bool) -> None:
        todo = self._select()
        if todo is None:
            return
        if completed:
            todo.complete()
        else:
            todo.uncomplete()
        self.repository.save(todo)
        self._print("Todo updated")

    def edit(self) -> None:
        todo = self._select()
        if todo is None:
            return
        self._print(f"old title: {todo.title}")
        self._print("new title: ", end="")
        todo.update(self._read_title())
        self.repository.save(todo)
        self._print("Todo updated")

    def delete(self) -> None:
        todo = self._select()
        if todo is None:
            return
        try:
            self.repository.delete(todo)
        except TodoDeleteError as e:
            self._print(f"Error deleting todo file {e.path}: {e.error}")
        self._print("Todo deleted")

    def run(self) -> int:
        """Read and dispatch actions until the user exits. Returns the exit status."""
        self._print(BANNER)
        self.help()
        while True:
            self._print("> ", end="")
            try:
                raw = self._read_token()
            except EOFError:
                self._print()
                break
            try:
                action = parse_int(raw)
            except ValueError as e:
                self._print(f"Error reading action: {e}")
                continue
            if action == EXIT_ACTION:
                break
            handler = self.actions.get(action)
            if handler is None:
                self._print("Unknown action")
                continue
            handler()
        self._print("Goodbye!")
        return 0


def main(argv: list[str] | None = None, prog_name: str | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog=prog_name,
        description="Interactive TODO list stored as one file per todo in ./todos",
    )
    parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        repository = TodoRepository.from_settings(settings)
        if settings.create_storage_root:
            try:
                repository.root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageFatalError(f"cannot create {repository.root}: {e}") from e
        status = TodoShell(repository).run()
    except StorageFatalError as e:
        logger.critical("fatal_storage_error", error=str(e))
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
