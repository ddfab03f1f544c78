"""Entry point for the todoapp CLI.

Usage:
    python -m todoapp.interfaces.cli.main

Or via installed entry point:
    todoapp <command>
"""

from todoapp.interfaces.cli import app


def main() -> None:
    """Run the todoapp CLI application."""
    app()


if __name__ == "__main__":
    main()
