"""Request/Response schemas for the todoapp REST API.

Request bodies reuse the application DTOs; this module adds the shapes
that only exist on the wire.
"""

from typing import Optional

from pydantic import BaseModel

from todoapp.application.dto import (
    CreateTodoRequest,
    ListTodosResponse,
    TodoResponse,
    UpdateTodoRequest,
)
from todoapp.domain.todo import BusinessRuleError, TodoError, ValidationError

# Response code for each error kind
STATUS_BY_KIND: dict[str, int] = {
    "validation": 400,
    "not_found": 404,
    "business_rule": 409,
    "conflict": 409,
    "infrastructure": 500,
}


class ErrorResponse(BaseModel):
    """Body of every non-2xx response produced by a use case."""

    error: str
    message: str
    field: Optional[str] = None
    rule: Optional[str] = None

    @classmethod
    def from_error(cls, error: TodoError) -> "ErrorResponse":
        return cls(
            error=error.kind,
            message=str(error),
            field=error.field if isinstance(error, ValidationError) else None,
            rule=error.rule if isinstance(error, BusinessRuleError) else None,
        )


class HealthResponse(BaseModel):
    status: str
    storage: str


__all__ = [
    "STATUS_BY_KIND",
    "ErrorResponse",
    "HealthResponse",
    "CreateTodoRequest",
    "UpdateTodoRequest",
    "TodoResponse",
    "ListTodosResponse",
]
