"""Tests for the JSON snapshot storage."""

import json

import pytest

from tasktracker.errors import PersistenceError
from tasktracker.models.task import Task, TaskStatus
from tasktracker.services.persistence import TaskFileStorage
from tasktracker.services.task_store import TaskStore


class TestLoad:
    """Test loading snapshots from disk."""

    def test_missing_file_is_empty_store(self, storage):
        assert not storage.path.exists()

        assert storage.load() == []
        # Parent directory is created on load
        assert storage.path.parent.is_dir()

    @pytest.mark.parametrize("content", ["", "   \n", "null"])
    def test_empty_file_is_empty_store(self, storage, content):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(content, encoding="utf-8")

        assert storage.load() == []

    def test_empty_file_counter_starts_at_one(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("", encoding="utf-8")
        store = TaskStore(storage)

        store.load()

        assert store.next_id == 1

    def test_malformed_json(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("[{", encoding="utf-8")

        with pytest.raises(PersistenceError, match="Malformed task file"):
            storage.load()

    def test_not_an_array(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text('{"id": "1"}', encoding="utf-8")

        with pytest.raises(PersistenceError, match="expected a JSON array"):
            storage.load()

    def test_invalid_status_rejected(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(
            json.dumps([{"id": "1", "title": "A", "description": "", "status": "blocked"}]),
            encoding="utf-8",
        )

        with pytest.raises(PersistenceError, match="Invalid task record"):
            storage.load()

    def test_missing_optional_fields_use_defaults(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(json.dumps([{"id": "1", "title": "A"}]), encoding="utf-8")

        (task,) = storage.load()

        assert task.description == ""
        assert task.status == TaskStatus.TODO

    def test_counter_ignores_non_numeric_ids(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(
            json.dumps([
                {"id": "3", "title": "A"},
                {"id": "legacy", "title": "B"},
                {"id": "10", "title": "C"},
            ]),
            encoding="utf-8",
        )
        store = TaskStore(storage)

        store.load()

        assert store.next_id == 11

    def test_counter_with_only_non_numeric_ids(self, storage):
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(json.dumps([{"id": "abc", "title": "A"}]), encoding="utf-8")
        store = TaskStore(storage)

        store.load()

        assert store.next_id == 1

    def test_unreadable_path(self, storage):
        # A directory where the file should be
        storage.path.mkdir(parents=True)

        with pytest.raises(PersistenceError):
            storage.load()


class TestSave:
    """Test writing snapshots to disk."""

    def test_round_trip(self, storage):
        tasks = [
            Task(id="1", title="A", description="first"),
            Task(id="5", title="B", status=TaskStatus.DONE),
            Task(id="3", title="C", status=TaskStatus.IN_PROGRESS),
        ]

        storage.save(tasks)
        store = TaskStore(storage)
        store.load()

        assert store.list_tasks() == tasks
        assert store.next_id == 6

    def test_writes_indented_array(self, storage):
        storage.save([Task(id="1", title="A")])

        raw = storage.path.read_text(encoding="utf-8")

        assert raw.startswith("[\n  {")
        assert json.loads(raw) == [
            {"id": "1", "title": "A", "description": "", "status": "todo"}
        ]

    def test_creates_parent_directory(self, tmp_path):
        storage = TaskFileStorage(tmp_path / "nested" / "dir" / "tasks.json")

        storage.save([])

        assert json.loads(storage.path.read_text(encoding="utf-8")) == []

    def test_save_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = TaskFileStorage(blocker / "tasks.json")

        with pytest.raises(PersistenceError, match="Cannot create data directory"):
            storage.save([Task(id="1", title="A")])
