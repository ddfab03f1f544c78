"""Request/response DTOs for the todo application service.

These Pydantic models are the boundary between presentation adapters and
the core. Requests hold raw, unvalidated values; the service turns them
into value objects. Responses are flat snapshots of an aggregate.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from todoapp.domain.todo import Todo


# =============================================================================
# Requests
# =============================================================================


class CreateTodoRequest(BaseModel):
    """Data needed to create a todo."""

    title: str
    description: str = ""
    priority: Optional[str] = None
    due_date: Optional[datetime] = None


class UpdateTodoRequest(BaseModel):
    """Partial update of a todo.

    Only fields that were explicitly supplied are applied. Supplying
    ``due_date=None`` clears the due date; omitting it leaves it alone.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[str] = None

    def provided(self, field: str) -> bool:
        """Check whether ``field`` was explicitly set by the caller."""
        return field in self.model_fields_set


class ListFilters(BaseModel):
    """Filtering and pagination options for listing todos."""

    status: Optional[str] = None
    priority: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


# =============================================================================
# Responses
# =============================================================================


class TodoResponse(BaseModel):
    """A todo as returned to callers."""

    id: str
    title: str
    description: str
    status: str
    priority: str
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None


class ListTodosResponse(BaseModel):
    """A page of todos with its size."""

    todos: list[TodoResponse] = Field(default_factory=list)
    total_count: int = 0


def map_todo_to_response(todo: Todo) -> TodoResponse:
    """Convert a Todo aggregate to a TodoResponse DTO."""
    return TodoResponse(
        id=str(todo.id),
        title=str(todo.title),
        description=todo.description,
        status=todo.status.value,
        priority=todo.priority.value,
        due_date=todo.due_date.value if todo.due_date else None,
        created_at=todo.created_at,
        updated_at=todo.updated_at,
        completed_at=todo.completed_at,
    )


def map_todos_to_response(todos: list[Todo]) -> list[TodoResponse]:
    return [map_todo_to_response(todo) for todo in todos]
