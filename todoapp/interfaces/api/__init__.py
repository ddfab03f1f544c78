"""REST API interface for todoapp.

This module exports the FastAPI router and app factory.
"""

from todoapp.interfaces.api.routes import create_app, router

__all__ = ["router", "create_app"]
