"""Presentation adapters for todoapp: REST API and CLI."""
