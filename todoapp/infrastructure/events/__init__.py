"""Event dispatch infrastructure for todoapp."""

from todoapp.infrastructure.events.dispatchers import (
    EventHandler,
    InMemoryEventDispatcher,
    LoggingEventDispatcher,
)

__all__ = [
    "EventHandler",
    "InMemoryEventDispatcher",
    "LoggingEventDispatcher",
]
