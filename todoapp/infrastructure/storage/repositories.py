"""Repository implementations for the Todo aggregate.

Both repositories store ``TodoRecord`` snapshots and rebuild a fresh
aggregate on every read, so an aggregate instance is never shared between
use cases. Expected failures are returned as ``Result`` values.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from todoapp.application.ports import TodoFilters
from todoapp.domain.shared.result import Err, Ok, Result
from todoapp.domain.todo import (
    AlreadyExistsError,
    InfrastructureError,
    NotFoundError,
    Todo,
    TodoError,
    TodoID,
)
from todoapp.infrastructure.storage.json_storage import JsonStorage
from todoapp.infrastructure.storage.records import (
    TodoRecord,
    record_to_todo,
    todo_to_record,
)

logger = logging.getLogger(__name__)

TODOS_FILE = "todos.json"


def apply_filters(records: Iterable[TodoRecord], filters: TodoFilters) -> list[TodoRecord]:
    """Filter, order newest-created first, then apply offset and limit."""
    selected = [
        r
        for r in records
        if (filters.status is None or r.status == filters.status.value)
        and (filters.priority is None or r.priority == filters.priority.value)
    ]
    selected.sort(key=lambda r: r.created_at, reverse=True)

    start = filters.offset or 0
    if filters.limit is None:
        return selected[start:]
    return selected[start : start + filters.limit]


def _decode_all(records: list[TodoRecord]) -> Result[list[Todo], TodoError]:
    todos: list[Todo] = []
    for record in records:
        decoded = record_to_todo(record)
        if isinstance(decoded, Err):
            return decoded
        todos.append(decoded.value)
    return Ok(todos)


class InMemoryTodoRepository:
    """Repository backed by a process-local dict.

    Used by tests and by the ``memory`` storage setting.
    """

    def __init__(self) -> None:
        self._records: dict[str, TodoRecord] = {}

    async def save(self, todo: Todo) -> Result[None, TodoError]:
        key = str(todo.id)
        if key in self._records:
            return Err(AlreadyExistsError(key))
        self._records[key] = todo_to_record(todo)
        return Ok(None)

    async def find_by_id(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        record = self._records.get(str(todo_id))
        if record is None:
            return Err(NotFoundError(str(todo_id)))
        return record_to_todo(record)

    async def find_all(self, filters: TodoFilters) -> Result[list[Todo], TodoError]:
        return _decode_all(apply_filters(self._records.values(), filters))

    async def update(self, todo: Todo) -> Result[None, TodoError]:
        key = str(todo.id)
        if key not in self._records:
            return Err(NotFoundError(key))
        self._records[key] = todo_to_record(todo)
        return Ok(None)

    async def delete(self, todo_id: TodoID) -> Result[None, TodoError]:
        if self._records.pop(str(todo_id), None) is None:
            return Err(NotFoundError(str(todo_id)))
        return Ok(None)

    def __len__(self) -> int:
        return len(self._records)


class JsonTodoRepository:
    """Repository persisting all todos in a single JSON document.

    Layout of ``<data_dir>/todos.json``::

        {"todos": {"<id>": {<TodoRecord fields>}, ...}}

    Every write rewrites the whole document atomically. File I/O is
    synchronous and blocks the event loop for the duration of a call; with
    no await between load and write, concurrent calls cannot interleave.
    """

    def __init__(self, data_dir: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            data_dir: Directory holding todos.json. Created on first write.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._path = Path(data_dir) / TODOS_FILE
        self._storage = storage or JsonStorage()

    @property
    def path(self) -> Path:
        return self._path

    async def save(self, todo: Todo) -> Result[None, TodoError]:
        loaded = self._load_records()
        if isinstance(loaded, Err):
            return loaded
        records = loaded.value

        key = str(todo.id)
        if key in records:
            return Err(AlreadyExistsError(key))
        records[key] = todo_to_record(todo)
        return self._write_records(records)

    async def find_by_id(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        loaded = self._load_records()
        if isinstance(loaded, Err):
            return loaded
        record = loaded.value.get(str(todo_id))
        if record is None:
            return Err(NotFoundError(str(todo_id)))
        return record_to_todo(record)

    async def find_all(self, filters: TodoFilters) -> Result[list[Todo], TodoError]:
        loaded = self._load_records()
        if isinstance(loaded, Err):
            return loaded
        return _decode_all(apply_filters(loaded.value.values(), filters))

    async def update(self, todo: Todo) -> Result[None, TodoError]:
        loaded = self._load_records()
        if isinstance(loaded, Err):
            return loaded
        records = loaded.value

        key = str(todo.id)
        if key not in records:
            return Err(NotFoundError(key))
        records[key] = todo_to_record(todo)
        return self._write_records(records)

    async def delete(self, todo_id: TodoID) -> Result[None, TodoError]:
        loaded = self._load_records()
        if isinstance(loaded, Err):
            return loaded
        records = loaded.value

        if records.pop(str(todo_id), None) is None:
            return Err(NotFoundError(str(todo_id)))
        return self._write_records(records)

    def _load_records(self) -> Result[dict[str, TodoRecord], TodoError]:
        result = self._storage.load_json(self._path, default={"todos": {}})
        if isinstance(result, Err):
            return result

        raw: Any = result.value.get("todos", {})
        if not isinstance(raw, dict):
            return Err(InfrastructureError("read_todos", f"malformed document {self._path}"))
        try:
            return Ok({key: TodoRecord(**value) for key, value in raw.items()})
        except (PydanticValidationError, TypeError) as e:
            logger.error(f"Invalid todo data in {self._path}: {e}")
            return Err(InfrastructureError("read_todos", f"invalid todo data: {e}"))

    def _write_records(self, records: dict[str, TodoRecord]) -> Result[None, TodoError]:
        document = {
            "todos": {key: record.model_dump(mode="json") for key, record in records.items()}
        }
        return self._storage.save_json(self._path, document)
