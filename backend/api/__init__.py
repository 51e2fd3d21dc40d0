"""
Todo API package.

Provides the FastAPI application for the multi-user todo service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
