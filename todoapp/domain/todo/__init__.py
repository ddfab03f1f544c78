"""Todo domain - the Todo aggregate and its building blocks.

All exports are pure (no I/O, no side effects).

Key Types:
    Todo - Aggregate root owning the status state machine
    TodoID, TaskTitle, DueDate - Self-validating value objects
    TaskStatus, Priority - Closed enumerations

Domain Events:
    TodoCreated, TodoUpdated, TodoCompleted, TodoReopened, TodoDeleted

Errors:
    ValidationError, InvalidEnumValueError, BusinessRuleError,
    NotFoundError, AlreadyExistsError, InfrastructureError
"""

from .errors import (
    AlreadyExistsError,
    BusinessRuleError,
    InfrastructureError,
    InvalidEnumValueError,
    NotFoundError,
    TodoError,
    ValidationError,
)
from .events import (
    TodoCompleted,
    TodoCreated,
    TodoDeleted,
    TodoReopened,
    TodoUpdated,
)
from .models import Todo
from .value_objects import (
    TITLE_MAX_LENGTH,
    DueDate,
    Priority,
    TaskStatus,
    TaskTitle,
    TodoID,
    can_transition,
)

__all__ = [
    # Aggregate
    "Todo",
    # Value objects
    "TodoID",
    "TaskTitle",
    "TaskStatus",
    "Priority",
    "DueDate",
    "TITLE_MAX_LENGTH",
    "can_transition",
    # Events
    "TodoCreated",
    "TodoUpdated",
    "TodoCompleted",
    "TodoReopened",
    "TodoDeleted",
    # Errors
    "TodoError",
    "ValidationError",
    "InvalidEnumValueError",
    "BusinessRuleError",
    "NotFoundError",
    "AlreadyExistsError",
    "InfrastructureError",
]
