"""Persisted shape of a todo and the mapping to and from the aggregate."""

from datetime import datetime

from pydantic import BaseModel

from todoapp.domain.shared.result import Err, Ok, Result
from todoapp.domain.todo import (
    DueDate,
    InfrastructureError,
    Priority,
    TaskStatus,
    TaskTitle,
    Todo,
    TodoID,
    ValidationError,
)


class TodoRecord(BaseModel):
    """One stored todo row.

    Status and priority hold their canonical lowercase strings. The
    completed_at column is kept so a reopened todo can be told apart from
    one that was never completed.
    """

    id: str
    title: str
    description: str = ""
    status: str
    priority: str
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None


def todo_to_record(todo: Todo) -> TodoRecord:
    return TodoRecord(
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


def record_to_todo(record: TodoRecord) -> Result[Todo, InfrastructureError]:
    """Rebuild an aggregate from a stored record.

    The due date is restored without the "must be in the future" check,
    since it may have lapsed since it was stored.

    Returns:
        Ok(Todo), or Err(InfrastructureError) if the record is corrupt.
    """
    todo_id = TodoID.parse(record.id)
    if isinstance(todo_id, Err):
        return Err(InfrastructureError("decode_todo", todo_id.error))
    status = TaskStatus.parse(record.status)
    if isinstance(status, Err):
        return Err(InfrastructureError("decode_todo", status.error))
    priority = Priority.parse(record.priority)
    if isinstance(priority, Err):
        return Err(InfrastructureError("decode_todo", priority.error))
    try:
        title = TaskTitle(record.title)
    except ValidationError as e:
        return Err(InfrastructureError("decode_todo", e))

    return Ok(
        Todo.reconstitute(
            todo_id=todo_id.value,
            title=title,
            description=record.description,
            status=status.value,
            priority=priority.value,
            due_date=DueDate.restore(record.due_date) if record.due_date else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
            completed_at=record.completed_at,
        )
    )
