"""Todo value objects.

Immutable, self-validating domain primitives. Construction either yields a
valid instance or raises a ``ValidationError`` naming the field; the
``parse``/``create`` factories wrap that in a ``Result`` for callers that
prefer values to exceptions.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID, uuid4

from todoapp.domain.shared.result import Err, Ok, Result
from todoapp.domain.todo.errors import InvalidEnumValueError, ValidationError

TITLE_MAX_LENGTH = 200


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True)
class TodoID:
    """Opaque, globally unique todo identifier backed by a UUID.

    Example:
        todo_id = TodoID.generate()
        same = TodoID.parse(str(todo_id))  # Ok(TodoID(...))
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise ValidationError("id", "invalid todo ID")

    @classmethod
    def generate(cls) -> "TodoID":
        """Create a new random identifier."""
        return cls(uuid4())

    @classmethod
    def parse(cls, raw: str) -> Result["TodoID", ValidationError]:
        """Parse the canonical string form of an identifier.

        Args:
            raw: Hyphenated UUID string.

        Returns:
            Ok(TodoID) if the string is a UUID, Err(ValidationError) otherwise.
        """
        if not raw or not raw.strip():
            return Err(ValidationError("id", "invalid todo ID"))
        try:
            return Ok(cls(UUID(raw.strip())))
        except (ValueError, AttributeError, TypeError):
            return Err(ValidationError("id", "invalid todo ID"))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TaskTitle:
    """A todo title: trimmed, between 1 and 200 characters.

    Surrounding whitespace is stripped before the length checks, so an
    all-whitespace title is reported as empty.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError("title", "must be a string")
        trimmed = self.value.strip()
        if not trimmed:
            raise ValidationError("title", "cannot be empty")
        if len(trimmed) > TITLE_MAX_LENGTH:
            raise ValidationError("title", f"cannot exceed {TITLE_MAX_LENGTH} characters")
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def create(cls, raw: str) -> Result["TaskTitle", ValidationError]:
        try:
            return Ok(cls(raw))
        except ValidationError as e:
            return Err(e)

    def __str__(self) -> str:
        return self.value


class TaskStatus(str, Enum):
    """Lifecycle state of a todo."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, raw: str) -> Result["TaskStatus", InvalidEnumValueError]:
        """Parse a status from its canonical string, ignoring case."""
        allowed = [s.value for s in cls]
        if isinstance(raw, str) and raw.strip().lower() in allowed:
            return Ok(cls(raw.strip().lower()))
        return Err(InvalidEnumValueError("status", str(raw), allowed))

    @property
    def is_completed(self) -> bool:
        return self is TaskStatus.COMPLETED

    @property
    def is_cancelled(self) -> bool:
        return self is TaskStatus.CANCELLED

    def can_transition_to(self, target: "TaskStatus") -> bool:
        """Check the transition table for ``self -> target``."""
        return can_transition(self, target)

    def __str__(self) -> str:
        return self.value


# Completed only reopens to pending; cancelled may go anywhere but completed.
_ALLOWED_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.PENDING: frozenset(TaskStatus),
    TaskStatus.IN_PROGRESS: frozenset(TaskStatus),
    TaskStatus.COMPLETED: frozenset({TaskStatus.PENDING}),
    TaskStatus.CANCELLED: frozenset(
        {TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED}
    ),
}


def can_transition(current: TaskStatus, target: TaskStatus) -> bool:
    """Return True if a todo may move from ``current`` to ``target``."""
    return target in _ALLOWED_TRANSITIONS[current]


class Priority(str, Enum):
    """Importance of a todo. Defaults to medium."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def default(cls) -> "Priority":
        return cls.MEDIUM

    @classmethod
    def parse(cls, raw: str | None) -> Result["Priority", InvalidEnumValueError]:
        """Parse a priority, falling back to the default when unspecified.

        Args:
            raw: Canonical priority string in any case, or None/"" for default.

        Returns:
            Ok(Priority) or Err(InvalidEnumValueError).
        """
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return Ok(cls.default())
        allowed = [p.value for p in cls]
        if isinstance(raw, str) and raw.strip().lower() in allowed:
            return Ok(cls(raw.strip().lower()))
        return Err(InvalidEnumValueError("priority", str(raw), allowed))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DueDate:
    """Deadline for a todo, stored as an aware UTC datetime.

    The "must be in the future" rule applies only in ``create``; a stored
    due date is allowed to lapse and is rebuilt with ``restore``.
    """

    value: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.value, datetime):
            raise ValidationError("due_date", "must be a datetime")
        object.__setattr__(self, "value", as_utc(self.value))

    @classmethod
    def create(
        cls,
        value: datetime,
        now: datetime | None = None,
    ) -> Result["DueDate", ValidationError]:
        """Create a due date that lies strictly after ``now``.

        Args:
            value: Requested deadline. Naive values are read as UTC.
            now: Reference time, defaults to the current UTC time.

        Returns:
            Ok(DueDate), or Err(ValidationError) when value <= now.
        """
        try:
            due = cls(value)
        except ValidationError as e:
            return Err(e)
        reference = as_utc(now) if now is not None else utc_now()
        if not due.value > reference:
            return Err(ValidationError("due_date", "due date must be in the future"))
        return Ok(due)

    @classmethod
    def restore(cls, value: datetime) -> "DueDate":
        """Rebuild a previously validated due date without the future check."""
        return cls(value)

    def is_past(self, now: datetime | None = None) -> bool:
        reference = as_utc(now) if now is not None else utc_now()
        return reference > self.value

    def is_approaching(self, within: timedelta, now: datetime | None = None) -> bool:
        """True if the deadline is no more than ``within`` away (or already past)."""
        reference = as_utc(now) if now is not None else utc_now()
        return self.value - reference <= within

    def __str__(self) -> str:
        return self.value.isoformat()
