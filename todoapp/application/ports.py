"""Ports the application service depends on.

Both are driven (secondary) ports: the application needs them, adapters in
``todoapp.infrastructure`` implement them. Every call is async and reports
expected failures through ``Result`` values.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from todoapp.domain.shared import DomainEvent, Result
from todoapp.domain.todo import Priority, TaskStatus, Todo, TodoError, TodoID


@dataclass(frozen=True)
class TodoFilters:
    """Query filters for ``TodoRepository.find_all``.

    Results are ordered newest-created first; offset and limit apply after
    ordering.
    """

    status: TaskStatus | None = None
    priority: Priority | None = None
    limit: int | None = None
    offset: int | None = None


@runtime_checkable
class TodoRepository(Protocol):
    """Persistence for Todo aggregates."""

    async def save(self, todo: Todo) -> Result[None, TodoError]:
        """Insert a new todo. Fails with AlreadyExistsError on a duplicate id."""
        ...

    async def find_by_id(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        """Load a todo, or Err(NotFoundError)."""
        ...

    async def find_all(self, filters: TodoFilters) -> Result[list[Todo], TodoError]: ...

    async def update(self, todo: Todo) -> Result[None, TodoError]:
        """Replace the stored todo. Err(NotFoundError) if it does not exist."""
        ...

    async def delete(self, todo_id: TodoID) -> Result[None, TodoError]: ...


@runtime_checkable
class EventDispatcher(Protocol):
    """Publishes domain events, at least once, in the order given."""

    async def dispatch(self, events: Sequence[DomainEvent]) -> Result[None, TodoError]: ...
