"""Event dispatcher adapters.

``LoggingEventDispatcher`` writes every event to the log; in a deployment
with a message broker it is the place to publish instead.
``InMemoryEventDispatcher`` records events and fans them out to async
subscribers, for tests and in-process reactions.
"""

import logging
from collections import deque
from collections.abc import Callable, Coroutine, Sequence
from typing import Any

from todoapp.domain.shared import DomainEvent, Ok, Result
from todoapp.domain.todo import TodoError

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Coroutine[Any, Any, None]]


class LoggingEventDispatcher:
    """Dispatcher that logs each event at info level."""

    def __init__(self, event_logger: logging.Logger | None = None) -> None:
        self._logger = event_logger or logger

    async def dispatch(self, events: Sequence[DomainEvent]) -> Result[None, TodoError]:
        for event in events:
            self._logger.info(
                "domain event dispatched",
                extra={
                    "event_type": event.event_type,
                    "aggregate_id": event.aggregate_id,
                    "event_data": event.to_payload(),
                },
            )
        return Ok(None)


class InMemoryEventDispatcher:
    """In-memory dispatcher for tests and in-process subscribers.

    Handlers run in subscription order. A failing handler is logged and
    skipped; the dispatch still succeeds. History is unbounded unless
    ``max_history`` is given, in which case only the newest events are kept.
    """

    def __init__(self, max_history: int | None = None) -> None:
        self._handlers: list[EventHandler] = []
        self._history: deque[DomainEvent] = deque(maxlen=max_history)

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    async def dispatch(self, events: Sequence[DomainEvent]) -> Result[None, TodoError]:
        for event in events:
            self._history.append(event)
            for handler in self._handlers:
                try:
                    await handler(event)
                except Exception:
                    logger.exception(
                        "Handler error for event=%s aggregate=%s",
                        event.event_type,
                        event.aggregate_id,
                    )
        return Ok(None)

    @property
    def history(self) -> list[DomainEvent]:
        """All events dispatched so far, in order. For testing."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
