"""
Todos module.

Handles ownership-scoped CRUD for the ``todos`` table.

Public API:
- ITodoService: Interface for todo operations
- Todo: A stored todo row
- CreateTodoRequest / UpdateTodoRequest: Request bodies
- TodoFilter: Client-side list partition
"""

from .interfaces import ITodoService
from .models import (
    Todo,
    TodoFilter,
    CreateTodoRequest,
    UpdateTodoRequest,
)
from .exceptions import (
    TodoNotFoundError,
    TodoStoreError,
)

__all__ = [
    # Interface
    "ITodoService",
    # Models
    "Todo",
    "TodoFilter",
    "CreateTodoRequest",
    "UpdateTodoRequest",
    # Exceptions
    "TodoNotFoundError",
    "TodoStoreError",
]
