"""Storage infrastructure for todoapp.

Repository adapters for the Todo aggregate, using Result values for
explicit error handling.
"""

from todoapp.infrastructure.storage.json_storage import JsonStorage
from todoapp.infrastructure.storage.records import (
    TodoRecord,
    record_to_todo,
    todo_to_record,
)
from todoapp.infrastructure.storage.repositories import (
    InMemoryTodoRepository,
    JsonTodoRepository,
    apply_filters,
)

__all__ = [
    "JsonStorage",
    "TodoRecord",
    "todo_to_record",
    "record_to_todo",
    "InMemoryTodoRepository",
    "JsonTodoRepository",
    "apply_filters",
]
