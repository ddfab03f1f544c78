"""Base domain event infrastructure.

Domain events are immutable records of something that happened to an
aggregate, captured at the moment it occurred. They carry only the data
subscribers need and are serialisable through pydantic.

Example usage:
    >>> class TodoArchived(DomainEvent):
    ...     event_type: ClassVar[str] = "TodoArchived"
    ...
    >>> event = TodoArchived(aggregate_id="7f0c...")
    >>> event.to_payload()["event_type"]
    'TodoArchived'
"""

from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID, the ID of the aggregate that emitted it and
    a UTC timestamp. Subclasses set ``event_type`` and add their payload
    fields.
    """

    event_type: ClassVar[str] = "DomainEvent"

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    aggregate_id: str
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-safe dict of the event, tagged with its type."""
        return {"event_type": self.event_type, **self.model_dump(mode="json")}
