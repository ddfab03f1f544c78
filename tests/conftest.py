"""Shared fixtures for the todoapp test suite."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pytest

from todoapp.application import TodoApplicationService, TodoFilters
from todoapp.domain.shared import DomainEvent, Err, Result
from todoapp.domain.todo import (
    InfrastructureError,
    TaskStatus,
    TaskTitle,
    Todo,
    TodoError,
    TodoID,
)
from todoapp.infrastructure.events import InMemoryEventDispatcher
from todoapp.infrastructure.storage import InMemoryTodoRepository


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class RecordingRepository(InMemoryTodoRepository):
    """In-memory repository that records which port methods were called."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def save(self, todo: Todo) -> Result[None, TodoError]:
        self.calls.append("save")
        return await super().save(todo)

    async def find_by_id(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        self.calls.append("find_by_id")
        return await super().find_by_id(todo_id)

    async def find_all(self, filters: TodoFilters) -> Result[list[Todo], TodoError]:
        self.calls.append("find_all")
        return await super().find_all(filters)

    async def update(self, todo: Todo) -> Result[None, TodoError]:
        self.calls.append("update")
        return await super().update(todo)

    async def delete(self, todo_id: TodoID) -> Result[None, TodoError]:
        self.calls.append("delete")
        return await super().delete(todo_id)


class FailingDispatcher:
    """Dispatcher whose every dispatch fails."""

    def __init__(self) -> None:
        self.attempts: list[list[DomainEvent]] = []

    async def dispatch(self, events: Sequence[DomainEvent]) -> Result[None, TodoError]:
        self.attempts.append(list(events))
        return Err(InfrastructureError("publish", "broker unavailable"))


class BrokenRepository(InMemoryTodoRepository):
    """Repository whose writes fail and whose reads raise."""

    async def save(self, todo: Todo) -> Result[None, TodoError]:
        return Err(InfrastructureError("write_json", "disk full"))

    async def find_by_id(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        raise ConnectionError("database went away")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def repository() -> RecordingRepository:
    return RecordingRepository()


@pytest.fixture
def dispatcher() -> InMemoryEventDispatcher:
    return InMemoryEventDispatcher()


@pytest.fixture
def service(
    repository: RecordingRepository,
    dispatcher: InMemoryEventDispatcher,
) -> TodoApplicationService:
    return TodoApplicationService(repository, dispatcher)


@pytest.fixture(autouse=True)
def _reset_todoapp_logging():
    """Undo any root handler and level installed by configure_logging."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_todoapp_handler", False):
            root.removeHandler(handler)


@pytest.fixture
def make_todo():
    """Factory building a todo in a given status, with no queued events."""

    def _make(status: TaskStatus = TaskStatus.PENDING, title: str = "Test Todo") -> Todo:
        todo = Todo.create(TaskTitle(title), "Test description")
        if status is TaskStatus.IN_PROGRESS:
            todo.mark_in_progress()
        elif status is TaskStatus.COMPLETED:
            todo.complete()
        elif status is TaskStatus.CANCELLED:
            todo.cancel()
        todo.clear_events()
        return todo

    return _make


@pytest.fixture
def failing_dispatcher() -> FailingDispatcher:
    return FailingDispatcher()


@pytest.fixture
def broken_repository() -> BrokenRepository:
    return BrokenRepository()
