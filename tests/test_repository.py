import os
import random

import pytest

from filetodo.config import Settings
from filetodo.errors import StorageFatalError, TodoDeleteError, TodoNotFoundError
from filetodo.repository import TodoRepository, get_dir_path
from filetodo.todo import Todo


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "todos"
    root.mkdir()
    return TodoRepository(root)


def test_create_persists_immediately(repo):
    todo = repo.create("Buy milk")
    assert todo.title == "Buy milk"
    assert todo.completed is False
    assert 0 <= todo.id < 1000
    assert repo.path_for(todo.id).read_bytes() == b"\x00Buy milk"
    assert repo.load(todo.id) == todo


def test_create_uses_rng_and_overwrites_on_collision(tmp_path):
    repo = TodoRepository(tmp_path, rng=random.Random(7))
    first = repo.create("first")
    repo.rng = random.Random(7)
    second = repo.create("second")
    assert first.id == second.id
    assert repo.load(first.id).title == "second"


def test_save_then_load(repo):
    todo = Todo(id=42, title="tab\there ✓", completed=True)
    repo.save(todo)
    assert repo.load(42) == todo


def test_save_overwrites_whole_record(repo):
    repo.save(Todo(id=3, title="a long title"))
    repo.save(Todo(id=3, title="short", completed=True))
    assert repo.path_for(3).read_bytes() == b"\x01short"


def test_load_missing(repo):
    with pytest.raises(TodoNotFoundError) as exc:
        repo.load(999999)
    assert exc.value.todo_id == 999999


def test_delete_then_load(repo):
    todo = repo.create("gone soon")
    repo.delete(todo)
    assert not repo.path_for(todo.id).exists()
    with pytest.raises(TodoNotFoundError):
        repo.load(todo.id)


def test_delete_missing_file_is_recoverable(repo):
    with pytest.raises(TodoDeleteError) as exc:
        repo.delete(Todo(id=5, title="never saved"))
    assert exc.value.path == repo.path_for(5)


def test_save_into_missing_directory_is_fatal(tmp_path):
    repo = TodoRepository(tmp_path / "missing")
    with pytest.raises(StorageFatalError):
        repo.save(Todo(id=1, title="x"))


def test_enumerate_missing_directory_is_fatal(tmp_path):
    with pytest.raises(StorageFatalError):
        TodoRepository(tmp_path / "missing").enumerate_all()


def test_enumerate_filters_entries(repo):
    repo.save(Todo(id=3, title="three"))
    (repo.root / "abc").write_bytes(b"\x00abc")
    (repo.root / "3.txt").write_bytes(b"\x00txt")
    (repo.root / "7").mkdir()
    assert repo.enumerate_all() == [Todo(id=3, title="three")]


def test_enumerate_skips_unloadable(repo, monkeypatch):
    repo.save(Todo(id=1, title="one"))
    repo.save(Todo(id=2, title="two"))
    real_load = repo.load

    def flaky_load(todo_id):
        if todo_id == 2:
            raise TodoNotFoundError(todo_id)
        return real_load(todo_id)

    monkeypatch.setattr(repo, "load", flaky_load)
    assert repo.enumerate_all() == [Todo(id=1, title="one")]


def test_enumerate_empty(repo):
    assert repo.enumerate_all() == []


def test_get_dir_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_dir_path() == tmp_path / "todos"


def test_get_dir_path_failure_is_fatal(monkeypatch):
    def broken_getcwd():
        raise FileNotFoundError("cwd removed")

    monkeypatch.setattr(os, "getcwd", broken_getcwd)
    with pytest.raises(StorageFatalError):
        get_dir_path()


def test_from_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    repo = TodoRepository.from_settings(Settings(max_id=5, read_chunk_size=8))
    assert repo.root == tmp_path / "todos"
    assert repo.max_id == 5
    assert repo.chunk_size == 8

    override = TodoRepository.from_settings(Settings(storage_root=tmp_path / "elsewhere"))
    assert override.root == tmp_path / "elsewhere"
