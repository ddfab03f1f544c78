"""Allow ``python -m todoapp``."""

from todoapp.interfaces.cli.main import main

main()
