"""CLI interface for todoapp using Typer.

Usage:
    todoapp add "Buy groceries" -p high --due 2030-01-01T09:00:00
    todoapp list --status pending
    todoapp complete <id>
    todoapp serve --port 8090

The CLI is structured as:
- app: Main Typer application
- commands/: Command implementations (todo, server)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from todoapp import __version__
from todoapp.config import get_settings
from todoapp.interfaces.cli.commands import server, todo
from todoapp.logging_setup import configure_logging

app = typer.Typer(
    name="todoapp",
    help="Track todo items from the command line",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"todoapp version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level",
    ),
) -> None:
    """todoapp - create, track and complete todo items."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, json_format=settings.is_production)


# =============================================================================
# Register Commands
# =============================================================================

app.command("add")(todo.add)
app.command("show")(todo.show)
app.command("list")(todo.list_todos)
app.command("update")(todo.update)
app.command("complete")(todo.complete)
app.command("reopen")(todo.reopen)
app.command("cancel")(todo.cancel)
app.command("start")(todo.start)
app.command("delete")(todo.delete)
app.command("serve")(server.serve)
