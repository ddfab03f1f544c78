"""Server command: run the REST API with uvicorn."""

from typing import Optional

import typer
import uvicorn

from todoapp.config import get_settings
from todoapp.interfaces.api import create_app
from todoapp.interfaces.cli.common import print_info


def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default from settings)"),
) -> None:
    """Run the todo REST API."""
    settings = get_settings()
    overrides = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if overrides:
        settings = settings.model_copy(update=overrides)

    print_info(f"Serving todoapp on http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)
