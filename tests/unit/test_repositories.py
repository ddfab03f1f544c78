"""Tests for the repository adapters and JSON storage."""

import asyncio
import json
from datetime import UTC, datetime, timedelta

import pytest

from todoapp.application import TodoFilters, TodoRepository
from todoapp.domain.shared import Err, Ok
from todoapp.domain.todo import (
    AlreadyExistsError,
    DueDate,
    InfrastructureError,
    NotFoundError,
    Priority,
    TaskStatus,
    TaskTitle,
    Todo,
    TodoID,
)
from todoapp.infrastructure.storage import (
    InMemoryTodoRepository,
    JsonStorage,
    JsonTodoRepository,
    todo_to_record,
)

BASE = datetime(2029, 3, 1, 9, 0, tzinfo=UTC)
LAPSED = datetime(2020, 5, 1, 17, 30, tzinfo=UTC)


def _stored(title: str, *, hours: int = 0, status=TaskStatus.PENDING, priority=Priority.MEDIUM) -> Todo:
    created = BASE + timedelta(hours=hours)
    return Todo.reconstitute(
        todo_id=TodoID.generate(),
        title=TaskTitle(title),
        description="",
        status=status,
        priority=priority,
        due_date=None,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture(params=["memory", "json"])
def repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryTodoRepository()
    return JsonTodoRepository(tmp_path / "data")


class TestRepositoryContract:
    def test_implements_port(self, repo):
        assert isinstance(repo, TodoRepository)

    async def test_save_and_find(self, repo):
        todo = Todo.create(TaskTitle("Persist me"), "details", Priority.HIGH)
        assert await repo.save(todo) == Ok(None)

        found = await repo.find_by_id(todo.id)
        assert isinstance(found, Ok)
        loaded = found.value
        assert loaded is not todo
        assert loaded.id == todo.id
        assert loaded.title == todo.title
        assert loaded.priority is Priority.HIGH
        assert loaded.created_at == todo.created_at
        assert loaded.pending_events == ()

    async def test_duplicate_save(self, repo):
        todo = Todo.create(TaskTitle("Once"))
        await repo.save(todo)
        result = await repo.save(todo)
        assert isinstance(result, Err)
        assert isinstance(result.error, AlreadyExistsError)

    async def test_missing(self, repo):
        missing = TodoID.generate()
        assert isinstance((await repo.find_by_id(missing)).error, NotFoundError)
        assert isinstance((await repo.delete(missing)).error, NotFoundError)
        assert isinstance((await repo.update(Todo.create(TaskTitle("x")))).error, NotFoundError)

    async def test_update_persists_completion(self, repo):
        todo = Todo.create(TaskTitle("Finish"))
        await repo.save(todo)
        todo.complete()
        assert await repo.update(todo) == Ok(None)

        loaded = (await repo.find_by_id(todo.id)).value
        assert loaded.status is TaskStatus.COMPLETED
        assert loaded.completed_at == todo.completed_at

    async def test_delete(self, repo):
        todo = Todo.create(TaskTitle("Gone soon"))
        await repo.save(todo)
        assert await repo.delete(todo.id) == Ok(None)
        assert isinstance((await repo.find_by_id(todo.id)).error, NotFoundError)

    async def test_find_all_orders_newest_first(self, repo):
        for todo in (_stored("oldest", hours=0), _stored("newest", hours=2), _stored("middle", hours=1)):
            await repo.save(todo)

        result = await repo.find_all(TodoFilters())
        assert [str(t.title) for t in result.value] == ["newest", "middle", "oldest"]

    async def test_find_all_filters_and_pages(self, repo):
        await repo.save(_stored("a", hours=0, priority=Priority.HIGH))
        await repo.save(_stored("b", hours=1, status=TaskStatus.COMPLETED, priority=Priority.HIGH))
        await repo.save(_stored("c", hours=2, priority=Priority.LOW))

        high = await repo.find_all(TodoFilters(priority=Priority.HIGH))
        assert [str(t.title) for t in high.value] == ["b", "a"]

        pending_high = await repo.find_all(
            TodoFilters(status=TaskStatus.PENDING, priority=Priority.HIGH)
        )
        assert [str(t.title) for t in pending_high.value] == ["a"]

        page = await repo.find_all(TodoFilters(limit=1, offset=1))
        assert [str(t.title) for t in page.value] == ["b"]

        empty = await repo.find_all(TodoFilters(offset=10))
        assert empty.value == []

    async def test_lapsed_due_date_is_still_readable(self, repo):
        todo = Todo.reconstitute(
            todo_id=TodoID.generate(),
            title=TaskTitle("Overdue"),
            description="",
            status=TaskStatus.PENDING,
            priority=Priority.MEDIUM,
            due_date=DueDate.restore(LAPSED),
            created_at=LAPSED - timedelta(days=10),
            updated_at=LAPSED - timedelta(days=10),
        )
        await repo.save(todo)

        loaded = (await repo.find_by_id(todo.id)).value
        assert loaded.due_date == todo.due_date
        assert loaded.is_due()


class TestJsonTodoRepository:
    async def test_document_layout(self, tmp_path):
        repo = JsonTodoRepository(tmp_path)
        todo = Todo.create(TaskTitle("On disk"))
        await repo.save(todo)

        document = json.loads(repo.path.read_text())
        record = document["todos"][str(todo.id)]
        assert record["title"] == "On disk"
        assert record["status"] == "pending"
        assert record["completed_at"] is None

    async def test_concurrent_saves_are_not_lost(self, tmp_path):
        repo = JsonTodoRepository(tmp_path)
        todos = [Todo.create(TaskTitle(f"Parallel {i}")) for i in range(10)]

        results = await asyncio.gather(*(repo.save(todo) for todo in todos))

        assert all(result == Ok(None) for result in results)
        stored = await repo.find_all(TodoFilters())
        assert {t.id for t in stored.value} == {t.id for t in todos}

    async def test_survives_new_instance(self, tmp_path):
        todo = Todo.create(TaskTitle("Durable"))
        await JsonTodoRepository(tmp_path).save(todo)

        found = await JsonTodoRepository(tmp_path).find_by_id(todo.id)
        assert found.value.id == todo.id

    async def test_corrupt_file(self, tmp_path):
        repo = JsonTodoRepository(tmp_path)
        repo.path.write_text("{not json")

        result = await repo.find_all(TodoFilters())
        assert isinstance(result, Err)
        assert isinstance(result.error, InfrastructureError)

    async def test_corrupt_record(self, tmp_path):
        repo = JsonTodoRepository(tmp_path)
        todo = Todo.create(TaskTitle("Tampered"))
        record = todo_to_record(todo).model_dump(mode="json")
        record["status"] = "archived"
        repo.path.write_text(json.dumps({"todos": {str(todo.id): record}}))

        result = await repo.find_by_id(todo.id)
        assert isinstance(result, Err)
        assert result.error.operation == "decode_todo"


class TestJsonStorage:
    def test_missing_file_uses_default(self, tmp_path):
        storage = JsonStorage()
        assert storage.load_json(tmp_path / "none.json", default={"a": 1}) == Ok({"a": 1})
        assert isinstance(storage.load_json(tmp_path / "none.json"), Err)

    def test_save_creates_parents_and_leaves_no_temp_files(self, tmp_path):
        storage = JsonStorage()
        path = tmp_path / "nested" / "doc.json"
        assert storage.save_json(path, {"k": "v"}) == Ok(None)
        assert storage.load_json(path) == Ok({"k": "v"})
        assert [p.name for p in path.parent.iterdir()] == ["doc.json"]

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert isinstance(JsonStorage().load_json(path), Err)

    def test_unserialisable_data(self, tmp_path):
        result = JsonStorage().save_json(tmp_path / "x.json", {"when": object()})
        assert isinstance(result, Err)
        assert result.error.operation == "write_json"
