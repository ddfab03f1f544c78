"""todoapp - a small task-tracking service built around a Todo aggregate."""

__version__ = "1.0.0"
