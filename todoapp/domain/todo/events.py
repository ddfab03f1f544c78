"""Todo domain events.

Immutable records of state changes on a Todo aggregate. The aggregate
queues them; the application service dispatches and then clears them.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import datetime
from typing import ClassVar

from todoapp.domain.shared.events import DomainEvent


class TodoCreated(DomainEvent):
    """Event raised when a new todo is created."""

    event_type: ClassVar[str] = "TodoCreated"

    title: str
    description: str = ""
    priority: str
    due_date: datetime | None = None


class TodoUpdated(DomainEvent):
    """Event raised when a todo's fields or status change.

    Only the field that changed is populated; the rest stay None.
    """

    event_type: ClassVar[str] = "TodoUpdated"

    title: str | None = None
    description: str | None = None
    priority: str | None = None
    due_date: datetime | None = None
    status: str | None = None


class TodoCompleted(DomainEvent):
    """Event raised when a todo is marked completed."""

    event_type: ClassVar[str] = "TodoCompleted"

    completed_at: datetime


class TodoReopened(DomainEvent):
    """Event raised when a completed or cancelled todo returns to pending."""

    event_type: ClassVar[str] = "TodoReopened"

    previous_status: str


class TodoDeleted(DomainEvent):
    """Event raised when a todo is removed from storage.

    Synthesized by the application service; carries only the id.
    """

    event_type: ClassVar[str] = "TodoDeleted"

