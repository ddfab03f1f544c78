"""Todo aggregate root.

The Todo is the single consistency boundary of the domain. It owns the
status state machine, the timestamps and the queue of events that have
not been dispatched yet. State changes only through its methods; each
method returns a ``Result`` so rule violations are values, not exceptions.
"""

from datetime import datetime, timedelta

from todoapp.domain.shared.events import DomainEvent
from todoapp.domain.shared.result import Err, Ok, Result
from todoapp.domain.todo.errors import (
    BusinessRuleError,
    cannot_complete_cancelled,
    cannot_modify_completed,
)
from todoapp.domain.todo.events import (
    TodoCompleted,
    TodoCreated,
    TodoReopened,
    TodoUpdated,
)
from todoapp.domain.todo.value_objects import (
    DueDate,
    Priority,
    TaskStatus,
    TaskTitle,
    TodoID,
    as_utc,
    utc_now,
)


class Todo:
    """A todo item and the rules that govern it.

    Invariants:
        - completed_at is set if and only if status is COMPLETED.
        - updated_at is never earlier than created_at.

    Example:
        todo = Todo.create(TaskTitle("Buy groceries"))
        todo.complete()
        events = todo.pending_events  # (TodoCreated, TodoCompleted)
        todo.clear_events()
    """

    def __init__(
        self,
        todo_id: TodoID,
        title: TaskTitle,
        description: str,
        status: TaskStatus,
        priority: Priority,
        due_date: DueDate | None,
        created_at: datetime,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> None:
        self._id = todo_id
        self._title = title
        self._description = description
        self._status = status
        self._priority = priority
        self._due_date = due_date
        self._created_at = as_utc(created_at)
        self._updated_at = max(as_utc(updated_at), self._created_at)
        self._completed_at = as_utc(completed_at) if completed_at else None
        self._events: list[DomainEvent] = []

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def create(
        cls,
        title: TaskTitle,
        description: str = "",
        priority: Priority = Priority.MEDIUM,
        due_date: DueDate | None = None,
    ) -> "Todo":
        """Create a new pending todo and queue a TodoCreated event."""
        now = utc_now()
        todo = cls(
            todo_id=TodoID.generate(),
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            priority=priority,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )
        todo._record(
            TodoCreated(
                aggregate_id=str(todo.id),
                occurred_at=now,
                title=str(title),
                description=description,
                priority=priority.value,
                due_date=due_date.value if due_date else None,
            )
        )
        return todo

    @classmethod
    def reconstitute(
        cls,
        todo_id: TodoID,
        title: TaskTitle,
        description: str,
        status: TaskStatus,
        priority: Priority,
        due_date: DueDate | None,
        created_at: datetime,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> "Todo":
        """Rebuild a todo from stored state. No events are queued.

        A completed todo stored without a completion time gets its
        updated_at as completion time so the invariant holds; any stored
        completion time on a non-completed todo is dropped.
        """
        if status is TaskStatus.COMPLETED and completed_at is None:
            completed_at = updated_at
        if status is not TaskStatus.COMPLETED:
            completed_at = None
        return cls(
            todo_id=todo_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            created_at=created_at,
            updated_at=updated_at,
            completed_at=completed_at,
        )

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def id(self) -> TodoID:
        return self._id

    @property
    def title(self) -> TaskTitle:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def priority(self) -> Priority:
        return self._priority

    @property
    def due_date(self) -> DueDate | None:
        return self._due_date

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        """Events queued since the last ``clear_events`` call, oldest first."""
        return tuple(self._events)

    def clear_events(self) -> None:
        """Drop queued events. Called once they have been dispatched."""
        self._events.clear()

    # =========================================================================
    # Field updates
    # =========================================================================

    def update_title(self, title: TaskTitle) -> Result[None, BusinessRuleError]:
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        self._title = title
        self._changed(title=str(title))
        return Ok(None)

    def update_description(self, description: str) -> Result[None, BusinessRuleError]:
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        self._description = description
        self._changed(description=description)
        return Ok(None)

    def update_priority(self, priority: Priority) -> Result[None, BusinessRuleError]:
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        self._priority = priority
        self._changed(priority=priority.value)
        return Ok(None)

    def update_due_date(self, due_date: DueDate | None) -> Result[None, BusinessRuleError]:
        """Set or clear (with None) the due date."""
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        self._due_date = due_date
        self._changed(due_date=due_date.value if due_date else None)
        return Ok(None)

    # =========================================================================
    # Status transitions
    # =========================================================================

    def update_status(self, status: TaskStatus) -> Result[None, BusinessRuleError]:
        """Move to ``status`` if the transition table allows it.

        Unlike ``complete``/``reopen`` this goes through the generic table,
        but completed_at is still kept in step with the new status.
        """
        if not self._status.can_transition_to(status):
            return Err(
                BusinessRuleError(
                    "status_transition",
                    f"cannot transition from {self._status.value} to {status.value}",
                )
            )
        now = utc_now()
        if status.is_completed and not self._status.is_completed:
            self._completed_at = now
        elif not status.is_completed:
            self._completed_at = None
        self._status = status
        self._changed(now=now, status=status.value)
        return Ok(None)

    def complete(self) -> Result[None, BusinessRuleError]:
        """Mark the todo completed. Idempotent; fails for cancelled todos."""
        if self._status.is_cancelled:
            return Err(cannot_complete_cancelled())
        if self._status.is_completed:
            return Ok(None)

        now = utc_now()
        self._status = TaskStatus.COMPLETED
        self._completed_at = now
        self._touch(now)
        self._record(
            TodoCompleted(aggregate_id=str(self._id), occurred_at=now, completed_at=now)
        )
        return Ok(None)

    def reopen(self) -> Result[None, BusinessRuleError]:
        """Return a completed or cancelled todo to pending. No-op otherwise."""
        if not (self._status.is_completed or self._status.is_cancelled):
            return Ok(None)

        now = utc_now()
        previous = self._status
        self._status = TaskStatus.PENDING
        self._completed_at = None
        self._touch(now)
        self._record(
            TodoReopened(
                aggregate_id=str(self._id),
                occurred_at=now,
                previous_status=previous.value,
            )
        )
        return Ok(None)

    def cancel(self) -> Result[None, BusinessRuleError]:
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        if self._status.is_cancelled:
            return Ok(None)
        self._status = TaskStatus.CANCELLED
        self._changed(status=TaskStatus.CANCELLED.value)
        return Ok(None)

    def mark_in_progress(self) -> Result[None, BusinessRuleError]:
        if self._status.is_completed:
            return Err(cannot_modify_completed())
        if self._status is TaskStatus.IN_PROGRESS:
            return Ok(None)
        self._status = TaskStatus.IN_PROGRESS
        self._changed(status=TaskStatus.IN_PROGRESS.value)
        return Ok(None)

    # =========================================================================
    # Queries
    # =========================================================================

    def is_due(self, now: datetime | None = None) -> bool:
        """True if a due date is set and has passed."""
        if self._due_date is None:
            return False
        return self._due_date.is_past(now)

    def is_due_soon(self, within: timedelta, now: datetime | None = None) -> bool:
        """True if a due date is set and falls within ``within`` from now."""
        if self._due_date is None:
            return False
        return self._due_date.is_approaching(within, now)

    # =========================================================================
    # Internals
    # =========================================================================

    def _touch(self, now: datetime) -> None:
        self._updated_at = max(now, self._created_at)

    def _changed(self, now: datetime | None = None, **fields: object) -> None:
        now = now or utc_now()
        self._touch(now)
        self._record(TodoUpdated(aggregate_id=str(self._id), occurred_at=now, **fields))

    def _record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def __repr__(self) -> str:
        return f"Todo(id={self._id}, title={self._title.value!r}, status={self._status.value})"
