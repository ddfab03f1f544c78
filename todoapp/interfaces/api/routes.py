"""FastAPI routes for todoapp.

Each route calls one use case and turns its ``Result`` into a response:
``Ok`` becomes the response body, ``Err`` becomes an ``ErrorResponse``
with the status code for its error kind.
"""

import logging
from typing import Optional, TypeVar

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from todoapp import __version__
from todoapp.application import ListFilters, TodoApplicationService
from todoapp.bootstrap import build_service
from todoapp.config import Settings, get_settings
from todoapp.domain.shared import Err, Result
from todoapp.domain.todo import TodoError
from todoapp.interfaces.api.schemas import (
    STATUS_BY_KIND,
    CreateTodoRequest,
    ErrorResponse,
    HealthResponse,
    ListTodosResponse,
    TodoResponse,
    UpdateTodoRequest,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter()


class UseCaseError(Exception):
    """Carries a use-case error out of a route to the exception handler."""

    def __init__(self, error: TodoError) -> None:
        super().__init__(str(error))
        self.error = error


def get_service(request: Request) -> TodoApplicationService:
    return request.app.state.service


def unwrap(result: Result[T, TodoError]) -> T:
    if isinstance(result, Err):
        raise UseCaseError(result.error)
    return result.value


async def handle_use_case_error(request: Request, exc: UseCaseError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.error.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_error(exc.error).model_dump(exclude_none=True),
    )


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request data in the same shape as use-case errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    body = ErrorResponse(
        error="validation",
        message=first.get("msg", "invalid request"),
        field=".".join(location) or None,
    )
    return JSONResponse(
        status_code=STATUS_BY_KIND["validation"],
        content=body.model_dump(exclude_none=True),
    )


# =============================================================================
# Todo Routes
# =============================================================================


@router.post("/todos", response_model=TodoResponse, status_code=201)
async def create_todo(
    req: CreateTodoRequest,
    service: TodoApplicationService = Depends(get_service),
):
    """Create a todo."""
    return unwrap(await service.create_todo(req))


@router.get("/todos", response_model=ListTodosResponse)
async def list_todos(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    service: TodoApplicationService = Depends(get_service),
):
    """List todos, newest first."""
    filters = ListFilters(status=status, priority=priority, limit=limit, offset=offset)
    return unwrap(await service.list_todos(filters))


@router.get("/todos/{todo_id}", response_model=TodoResponse)
async def get_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    return unwrap(await service.get_todo(todo_id))


@router.patch("/todos/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    req: UpdateTodoRequest,
    service: TodoApplicationService = Depends(get_service),
):
    """Partially update a todo. Send ``"due_date": null`` to clear it."""
    return unwrap(await service.update_todo(todo_id, req))


@router.post("/todos/{todo_id}/complete", response_model=TodoResponse)
async def complete_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    return unwrap(await service.complete_todo(todo_id))


@router.post("/todos/{todo_id}/reopen", response_model=TodoResponse)
async def reopen_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    return unwrap(await service.reopen_todo(todo_id))


@router.post("/todos/{todo_id}/cancel", response_model=TodoResponse)
async def cancel_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    return unwrap(await service.cancel_todo(todo_id))


@router.post("/todos/{todo_id}/start", response_model=TodoResponse)
async def start_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    return unwrap(await service.start_todo(todo_id))


@router.delete("/todos/{todo_id}", status_code=204)
async def delete_todo(todo_id: str, service: TodoApplicationService = Depends(get_service)):
    unwrap(await service.delete_todo(todo_id))
    return Response(status_code=204)


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    service: TodoApplicationService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        service: Pre-built service (tests pass one with in-memory adapters).
        settings: Settings used to build the service. Loaded from the config
            file when neither a service nor settings are given.
    """
    if settings is None:
        settings = Settings() if service is not None else get_settings()

    app = FastAPI(
        title="todoapp",
        description="Task-tracking service",
        version=__version__,
    )
    app.state.service = service or build_service(settings)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:4200", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(UseCaseError, handle_use_case_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="healthy", storage=settings.storage)

    app.include_router(router)
    return app
