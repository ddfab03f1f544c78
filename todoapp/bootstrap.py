"""Wiring of adapters into the application service."""

import logging
from pathlib import Path

from todoapp.application import TodoApplicationService, TodoRepository
from todoapp.config import Settings
from todoapp.infrastructure.events import LoggingEventDispatcher
from todoapp.infrastructure.storage import InMemoryTodoRepository, JsonTodoRepository

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> TodoRepository:
    if settings.storage == "memory":
        return InMemoryTodoRepository()
    return JsonTodoRepository(Path(settings.data_dir).expanduser())


def build_service(settings: Settings) -> TodoApplicationService:
    """Create the application service with the adapters ``settings`` selects."""
    repository = build_repository(settings)
    logger.info(f"Using {settings.storage} storage ({settings.data_dir})")
    return TodoApplicationService(repository, LoggingEventDispatcher())
