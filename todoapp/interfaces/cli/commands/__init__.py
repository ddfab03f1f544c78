"""CLI command modules for todoapp.

- todo: item lifecycle commands (add, show, list, update, complete, ...)
- server: run the REST API
"""

from todoapp.interfaces.cli.commands import server, todo

__all__ = ["server", "todo"]
