"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the root handler: plain text in development, one JSON object per
line in production. The JSON lines are rendered by structlog, which also
carries ``extra=`` fields into the output.
"""

import logging
import sys
from typing import Any

import structlog

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _pre_chain() -> list[Any]:
    """Processors applied to records coming from stdlib loggers."""
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering each record as a single JSON line."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
    )


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Install a single stream handler on the root logger.

    Calling it again replaces the previous handler.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(json_formatter() if json_format else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_todoapp_handler", False):
            root.removeHandler(existing)
    handler._todoapp_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper())
