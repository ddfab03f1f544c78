"""Todo application service.

Orchestrates one use case per call around the Todo aggregate:

1. Parse every external field into value objects (no storage access on failure).
2. Load the aggregate through the repository port.
3. Invoke the aggregate behaviour.
4. Persist through the repository port.
5. Dispatch the queued events through the dispatcher port.
6. Clear the events, only after a successful dispatch.
7. Map the aggregate to a response DTO.

Validation, business-rule and not-found errors are returned unchanged;
everything else a port reports is wrapped in an InfrastructureError naming
the operation. A dispatch failure after a successful write is reported as a
failure of the whole use case: the write is durable, the notification is
not guaranteed.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from todoapp.application.dto import (
    CreateTodoRequest,
    ListFilters,
    ListTodosResponse,
    TodoResponse,
    UpdateTodoRequest,
    map_todo_to_response,
    map_todos_to_response,
)
from todoapp.application.ports import EventDispatcher, TodoFilters, TodoRepository
from todoapp.domain.shared import DomainEvent, Err, Ok, Result
from todoapp.domain.todo import (
    BusinessRuleError,
    DueDate,
    InfrastructureError,
    NotFoundError,
    Priority,
    TaskStatus,
    TaskTitle,
    Todo,
    TodoDeleted,
    TodoError,
    TodoID,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors that reach the caller exactly as the domain or repository produced them
_PASSTHROUGH = (ValidationError, BusinessRuleError, NotFoundError)


def _as_use_case_error(operation: str, error: TodoError | Exception) -> TodoError:
    if isinstance(error, _PASSTHROUGH):
        return error
    return InfrastructureError(operation, error)


class TodoApplicationService:
    """Use cases for creating, reading, changing and deleting todos.

    Example:
        service = TodoApplicationService(InMemoryTodoRepository(), LoggingEventDispatcher())
        result = await service.create_todo(CreateTodoRequest(title="Buy groceries"))
        if is_ok(result):
            print(result.value.id)
    """

    def __init__(self, repository: TodoRepository, dispatcher: EventDispatcher) -> None:
        self._repository = repository
        self._dispatcher = dispatcher

    # =========================================================================
    # Use cases
    # =========================================================================

    async def create_todo(self, req: CreateTodoRequest) -> Result[TodoResponse, TodoError]:
        """Create a todo, persist it and publish TodoCreated."""
        title = TaskTitle.create(req.title)
        if isinstance(title, Err):
            return self._rejected("create_todo", title.error)

        priority = Priority.parse(req.priority)
        if isinstance(priority, Err):
            return self._rejected("create_todo", priority.error)

        due_date: DueDate | None = None
        if req.due_date is not None:
            parsed_due = DueDate.create(req.due_date)
            if isinstance(parsed_due, Err):
                return self._rejected("create_todo", parsed_due.error)
            due_date = parsed_due.value

        todo = Todo.create(title.value, req.description or "", priority.value, due_date)

        saved = await self._call("save_todo", lambda: self._repository.save(todo))
        if isinstance(saved, Err):
            return self._rejected("create_todo", saved.error)

        return await self._publish_and_map("create_todo", todo)

    async def get_todo(self, todo_id: str) -> Result[TodoResponse, TodoError]:
        parsed_id = TodoID.parse(todo_id)
        if isinstance(parsed_id, Err):
            return self._rejected("get_todo", parsed_id.error)

        found = await self._load(parsed_id.value)
        if isinstance(found, Err):
            return self._rejected("get_todo", found.error)
        return Ok(map_todo_to_response(found.value))

    async def update_todo(
        self,
        todo_id: str,
        req: UpdateTodoRequest,
    ) -> Result[TodoResponse, TodoError]:
        """Apply a partial update.

        All supplied fields are validated before the todo is loaded. They are
        then applied in the order title, description, priority, due date,
        status; the first business-rule failure aborts the update and
        nothing is persisted.
        """
        parsed_id = TodoID.parse(todo_id)
        if isinstance(parsed_id, Err):
            return self._rejected("update_todo", parsed_id.error)

        title: TaskTitle | None = None
        if req.provided("title") and req.title is not None:
            parsed_title = TaskTitle.create(req.title)
            if isinstance(parsed_title, Err):
                return self._rejected("update_todo", parsed_title.error)
            title = parsed_title.value

        priority: Priority | None = None
        if req.provided("priority") and req.priority is not None:
            parsed_priority = Priority.parse(req.priority)
            if isinstance(parsed_priority, Err):
                return self._rejected("update_todo", parsed_priority.error)
            priority = parsed_priority.value

        due_date: DueDate | None = None
        if req.provided("due_date") and req.due_date is not None:
            parsed_due = DueDate.create(req.due_date)
            if isinstance(parsed_due, Err):
                return self._rejected("update_todo", parsed_due.error)
            due_date = parsed_due.value

        status: TaskStatus | None = None
        if req.provided("status") and req.status is not None:
            parsed_status = TaskStatus.parse(req.status)
            if isinstance(parsed_status, Err):
                return self._rejected("update_todo", parsed_status.error)
            status = parsed_status.value

        found = await self._load(parsed_id.value)
        if isinstance(found, Err):
            return self._rejected("update_todo", found.error)
        todo = found.value

        changes: list[Callable[[], Result[None, BusinessRuleError]]] = []
        if title is not None:
            changes.append(lambda: todo.update_title(title))
        if req.provided("description") and req.description is not None:
            changes.append(lambda: todo.update_description(req.description or ""))
        if priority is not None:
            changes.append(lambda: todo.update_priority(priority))
        if req.provided("due_date"):
            changes.append(lambda: todo.update_due_date(due_date))
        if status is not None:
            changes.append(lambda: todo.update_status(status))

        for change in changes:
            applied = change()
            if isinstance(applied, Err):
                return self._rejected("update_todo", applied.error)

        return await self._store_and_publish("update_todo", todo)

    async def complete_todo(self, todo_id: str) -> Result[TodoResponse, TodoError]:
        return await self._transition("complete_todo", todo_id, Todo.complete)

    async def reopen_todo(self, todo_id: str) -> Result[TodoResponse, TodoError]:
        return await self._transition("reopen_todo", todo_id, Todo.reopen)

    async def cancel_todo(self, todo_id: str) -> Result[TodoResponse, TodoError]:
        return await self._transition("cancel_todo", todo_id, Todo.cancel)

    async def start_todo(self, todo_id: str) -> Result[TodoResponse, TodoError]:
        return await self._transition("start_todo", todo_id, Todo.mark_in_progress)

    async def delete_todo(self, todo_id: str) -> Result[None, TodoError]:
        """Delete a todo by id and publish TodoDeleted.

        The aggregate is never loaded; the event is synthesized here.
        """
        parsed_id = TodoID.parse(todo_id)
        if isinstance(parsed_id, Err):
            return self._rejected("delete_todo", parsed_id.error)

        deleted = await self._call(
            "delete_todo", lambda: self._repository.delete(parsed_id.value)
        )
        if isinstance(deleted, Err):
            return self._rejected("delete_todo", deleted.error)

        dispatched = await self._dispatch([TodoDeleted(aggregate_id=str(parsed_id.value))])
        if isinstance(dispatched, Err):
            return self._rejected("delete_todo", dispatched.error)

        logger.info(f"Deleted todo {parsed_id.value}")
        return Ok(None)

    async def list_todos(self, filters: ListFilters) -> Result[ListTodosResponse, TodoError]:
        """List todos, newest first, with optional status/priority filters."""
        status: TaskStatus | None = None
        if filters.status is not None:
            parsed_status = TaskStatus.parse(filters.status)
            if isinstance(parsed_status, Err):
                return self._rejected("list_todos", parsed_status.error)
            status = parsed_status.value

        priority: Priority | None = None
        if filters.priority is not None:
            if not filters.priority.strip():
                return self._rejected(
                    "list_todos", ValidationError("priority", "cannot be empty")
                )
            parsed_priority = Priority.parse(filters.priority)
            if isinstance(parsed_priority, Err):
                return self._rejected("list_todos", parsed_priority.error)
            priority = parsed_priority.value

        if filters.limit is not None and filters.limit < 0:
            return self._rejected("list_todos", ValidationError("limit", "must be non-negative"))
        if filters.offset is not None and filters.offset < 0:
            return self._rejected("list_todos", ValidationError("offset", "must be non-negative"))

        query = TodoFilters(
            status=status,
            priority=priority,
            limit=filters.limit,
            offset=filters.offset,
        )
        found = await self._call("find_todos", lambda: self._repository.find_all(query))
        if isinstance(found, Err):
            return self._rejected("list_todos", found.error)

        todos = found.value
        return Ok(ListTodosResponse(todos=map_todos_to_response(todos), total_count=len(todos)))

    # =========================================================================
    # Steps shared by the use cases
    # =========================================================================

    async def _transition(
        self,
        operation: str,
        todo_id: str,
        action: Callable[[Todo], Result[None, BusinessRuleError]],
    ) -> Result[TodoResponse, TodoError]:
        parsed_id = TodoID.parse(todo_id)
        if isinstance(parsed_id, Err):
            return self._rejected(operation, parsed_id.error)

        found = await self._load(parsed_id.value)
        if isinstance(found, Err):
            return self._rejected(operation, found.error)
        todo = found.value

        applied = action(todo)
        if isinstance(applied, Err):
            return self._rejected(operation, applied.error)

        return await self._store_and_publish(operation, todo)

    async def _load(self, todo_id: TodoID) -> Result[Todo, TodoError]:
        return await self._call("find_todo", lambda: self._repository.find_by_id(todo_id))

    async def _store_and_publish(
        self,
        operation: str,
        todo: Todo,
    ) -> Result[TodoResponse, TodoError]:
        updated = await self._call("update_todo", lambda: self._repository.update(todo))
        if isinstance(updated, Err):
            return self._rejected(operation, updated.error)
        return await self._publish_and_map(operation, todo)

    async def _publish_and_map(
        self,
        operation: str,
        todo: Todo,
    ) -> Result[TodoResponse, TodoError]:
        events = todo.pending_events
        if events:
            dispatched = await self._dispatch(events)
            if isinstance(dispatched, Err):
                # The write above is durable; only the notification failed.
                return self._rejected(operation, dispatched.error)
            todo.clear_events()

        logger.info(f"{operation} succeeded for todo {todo.id} ({len(events)} event(s))")
        return Ok(map_todo_to_response(todo))

    async def _dispatch(self, events: Sequence[DomainEvent]) -> Result[None, TodoError]:
        return await self._call("dispatch_events", lambda: self._dispatcher.dispatch(events))

    async def _call(
        self,
        operation: str,
        port_call: Callable[[], Awaitable[Result[T, TodoError]]],
    ) -> Result[T, TodoError]:
        """Await a port call, normalising its failures to use-case errors."""
        try:
            result = await port_call()
        except Exception as e:
            logger.exception(f"Port call {operation} raised")
            return Err(InfrastructureError(operation, e))
        if isinstance(result, Err):
            return Err(_as_use_case_error(operation, result.error))
        return result

    def _rejected(self, operation: str, error: TodoError) -> Err[TodoError]:
        if isinstance(error, InfrastructureError):
            logger.error(f"{operation} failed: {error}")
        else:
            logger.warning(f"{operation} rejected: {error}")
        return Err(error)
