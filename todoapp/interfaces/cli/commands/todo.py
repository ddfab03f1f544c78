"""Todo CLI commands.

Each command runs exactly one use case against the configured storage and
prints the outcome. Failures print the error kind and exit with status 1.
"""

from typing import Any, Optional

import typer

from todoapp.application import CreateTodoRequest, ListFilters, UpdateTodoRequest
from todoapp.interfaces.cli.common import (
    format_todo_line,
    get_service,
    parse_datetime,
    print_error,
    print_info,
    print_success,
    print_todo,
    run_use_case,
)


def add(
    title: str = typer.Argument(..., help="Todo title (1-200 characters)"),
    description: str = typer.Option("", "--description", "-d", help="Free-text description"),
    priority: Optional[str] = typer.Option(
        None, "--priority", "-p", help="low, medium, high or urgent (default: medium)"
    ),
    due: Optional[str] = typer.Option(None, "--due", help="ISO-8601 due date, must be in the future"),
) -> None:
    """Create a new todo."""
    req = CreateTodoRequest(
        title=title,
        description=description,
        priority=priority,
        due_date=parse_datetime(due),
    )
    todo = run_use_case(get_service().create_todo(req))
    print_success(f"Created {todo.id}")
    print_todo(todo)


def show(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Show a single todo."""
    print_todo(run_use_case(get_service().get_todo(todo_id)))


def list_todos(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="Filter by priority"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum number of todos"),
    offset: Optional[int] = typer.Option(None, "--offset", help="Number of todos to skip"),
) -> None:
    """List todos, newest first."""
    filters = ListFilters(status=status, priority=priority, limit=limit, offset=offset)
    page = run_use_case(get_service().list_todos(filters))

    if not page.todos:
        print_info("No todos found.")
        return
    for todo in page.todos:
        typer.echo(format_todo_line(todo))
    print_info(f"{page.total_count} todo(s)")


def update(
    todo_id: str = typer.Argument(..., help="Todo ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p"),
    due: Optional[str] = typer.Option(None, "--due", help="New ISO-8601 due date"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    status: Optional[str] = typer.Option(None, "--status", "-s"),
) -> None:
    """Update one or more fields of a todo."""
    if due is not None and clear_due:
        print_error("--due and --clear-due are mutually exclusive")
        raise typer.Exit(1)

    fields: dict[str, Any] = {}
    if title is not None:
        fields["title"] = title
    if description is not None:
        fields["description"] = description
    if priority is not None:
        fields["priority"] = priority
    if due is not None:
        fields["due_date"] = parse_datetime(due)
    if clear_due:
        fields["due_date"] = None
    if status is not None:
        fields["status"] = status

    if not fields:
        print_error("Nothing to update")
        raise typer.Exit(1)

    todo = run_use_case(get_service().update_todo(todo_id, UpdateTodoRequest(**fields)))
    print_success(f"Updated {todo.id}")
    print_todo(todo)


def complete(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Mark a todo as completed."""
    todo = run_use_case(get_service().complete_todo(todo_id))
    print_success(f"Completed: {todo.title}")


def reopen(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Reopen a completed or cancelled todo."""
    todo = run_use_case(get_service().reopen_todo(todo_id))
    print_success(f"Reopened: {todo.title} [{todo.status}]")


def cancel(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Cancel a todo."""
    todo = run_use_case(get_service().cancel_todo(todo_id))
    print_success(f"Cancelled: {todo.title}")


def start(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Mark a todo as in progress."""
    todo = run_use_case(get_service().start_todo(todo_id))
    print_success(f"Started: {todo.title}")


def delete(todo_id: str = typer.Argument(..., help="Todo ID")) -> None:
    """Delete a todo."""
    run_use_case(get_service().delete_todo(todo_id))
    print_success(f"Deleted {todo_id}")
