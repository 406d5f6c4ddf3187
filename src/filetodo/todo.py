"""The Todo record."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Todo:
    id: int
    title: str
    completed: bool = False

    def complete(self) -> None:
        self.completed = True

    def uncomplete(self) -> None:
        self.completed = False

    def update(self, title: str) -> None:
        self.title = title

    def line(self) -> str:
        return f"{self.id}\t{self.title}"
