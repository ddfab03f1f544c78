"""Infrastructure adapters for todoapp.

Implementations of the application ports:

- storage: JSON-file and in-memory todo repositories
- events: logging and in-memory event dispatchers
"""
