"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.todos.interfaces import ITodoService
    from modules.todos.repository import TodoRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached within
    the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._todo_service: "ITodoService | None" = None
        self._todo_repository: "TodoRepository | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def todo_repository(self) -> "TodoRepository":
        """Get the todo repository instance."""
        if self._todo_repository is None:
            from modules.todos.repository import TodoRepository
            from shared.database import get_supabase_client
            self._todo_repository = TodoRepository(get_supabase_client())
        return self._todo_repository

    @property
    def todos(self) -> "ITodoService":
        """Get the todo service instance."""
        if self._todo_service is None:
            from modules.todos.service import TodoService
            self._todo_service = TodoService(repository=self.todo_repository)
        return self._todo_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._todo_service = None
        self._todo_repository = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_todo_service() -> "ITodoService":
    """FastAPI dependency for todo service."""
    return get_container().todos
