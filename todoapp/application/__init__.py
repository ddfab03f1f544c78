"""Application service layer for todoapp.

The application layer sequences validation, persistence and event
dispatch around the Todo aggregate. It talks to storage and messaging only
through the ports declared in ``todoapp.application.ports``.

Example usage:
    >>> from todoapp.application import TodoApplicationService, CreateTodoRequest
    >>> from todoapp.domain.shared import is_ok
    >>>
    >>> result = await service.create_todo(CreateTodoRequest(title="Buy groceries"))
    >>> if is_ok(result):
    ...     print(result.value.status)
    pending
"""

from todoapp.application.dto import (
    CreateTodoRequest,
    ListFilters,
    ListTodosResponse,
    TodoResponse,
    UpdateTodoRequest,
    map_todo_to_response,
    map_todos_to_response,
)
from todoapp.application.ports import EventDispatcher, TodoFilters, TodoRepository
from todoapp.application.todo_service import TodoApplicationService

__all__ = [
    # Service
    "TodoApplicationService",
    # Ports
    "TodoRepository",
    "EventDispatcher",
    "TodoFilters",
    # DTOs
    "CreateTodoRequest",
    "UpdateTodoRequest",
    "ListFilters",
    "TodoResponse",
    "ListTodosResponse",
    "map_todo_to_response",
    "map_todos_to_response",
]
