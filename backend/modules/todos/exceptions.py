"""
Todos module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    ExternalServiceError,
)


class TodoNotFoundError(NotFoundError):
    """
    Raised when no row matches both the todo ID and the caller.

    Rows owned by other users are reported the same way as missing rows.
    """

    def __init__(self, todo_id: str):
        super().__init__(
            f"Todo not found: {todo_id}",
            code="TODO_NOT_FOUND",
            details={"todo_id": todo_id},
        )


class TodoStoreError(ExternalServiceError):
    """Raised when the data store rejects or fails a query."""

    def __init__(self, message: str):
        super().__init__(message, service="supabase", code="STORE_ERROR")
