"""Shared utilities for todoapp CLI commands.

- Service construction from the configured settings
- Running async use cases from synchronous commands
- Formatted output helpers (error, success, info)
- Todo formatting for display
"""

import asyncio
from collections.abc import Awaitable
from datetime import datetime
from typing import Optional, TypeVar

import typer

from todoapp.application import TodoApplicationService, TodoResponse
from todoapp.bootstrap import build_service
from todoapp.config import get_settings
from todoapp.domain.shared import Err, Result
from todoapp.domain.todo import TodoError

T = TypeVar("T")


def get_service() -> TodoApplicationService:
    """Build the application service from the current settings."""
    return build_service(get_settings())


def run_use_case(call: Awaitable[Result[T, TodoError]]) -> T:
    """Run a use case to completion, exiting with status 1 on failure.

    Raises:
        typer.Exit: If the use case returned an error.
    """
    result = asyncio.run(call)
    if isinstance(result, Err):
        print_error(f"[{result.error.kind}] {result.error}")
        raise typer.Exit(1)
    return result.value


def parse_datetime(value: Optional[str], option: str = "--due") -> Optional[datetime]:
    """Parse an ISO-8601 option value.

    Raises:
        typer.Exit: If the value is not ISO-8601.
    """
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        print_error(f"{option} must be an ISO-8601 datetime, got {value!r}")
        raise typer.Exit(1) from None


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def format_todo_line(todo: TodoResponse) -> str:
    """One-line summary: ``<id>  [status] (priority) title``."""
    due = f"  due {todo.due_date.isoformat()}" if todo.due_date else ""
    return f"{todo.id}  [{todo.status}] ({todo.priority}) {todo.title}{due}"


def print_todo(todo: TodoResponse) -> None:
    """Print every field of a todo."""
    print_separator()
    typer.echo(f"ID:          {todo.id}")
    typer.echo(f"Title:       {todo.title}")
    if todo.description:
        typer.echo(f"Description: {todo.description}")
    typer.echo(f"Status:      {todo.status}")
    typer.echo(f"Priority:    {todo.priority}")
    if todo.due_date:
        typer.echo(f"Due:         {todo.due_date.isoformat()}")
    typer.echo(f"Created:     {todo.created_at.isoformat()}")
    typer.echo(f"Updated:     {todo.updated_at.isoformat()}")
    if todo.completed_at:
        typer.echo(f"Completed:   {todo.completed_at.isoformat()}")
    print_separator()
