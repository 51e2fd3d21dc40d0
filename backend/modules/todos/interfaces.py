"""
Todos module interface.

The API layer depends on ITodoService for all todo operations.
"""

from typing import Protocol, runtime_checkable

from .models import CreateTodoRequest, Todo, UpdateTodoRequest


@runtime_checkable
class ITodoService(Protocol):
    """
    Interface for todo operations.

    Every method takes the authenticated caller's ID and only ever
    touches rows owned by that caller.
    """

    async def list_todos(self, user_id: str) -> list[Todo]:
        """
        List all of the caller's todos, most recent first.

        Raises:
            TodoStoreError: If the store query fails
        """
        ...

    async def create_todo(self, user_id: str, request: CreateTodoRequest) -> Todo:
        """
        Create a todo owned by the caller.

        The todo starts uncompleted; its date is the request's
        due date or null.

        Raises:
            TodoStoreError: If the store query fails
        """
        ...

    async def update_todo(
        self,
        todo_id: str,
        user_id: str,
        request: UpdateTodoRequest,
    ) -> Todo:
        """
        Replace the task, completion flag and date of an owned todo.

        Raises:
            TodoNotFoundError: If no row matches both ID and caller
            TodoStoreError: If the store query fails
        """
        ...

    async def delete_todo(self, todo_id: str, user_id: str) -> None:
        """
        Delete an owned todo.

        Raises:
            TodoNotFoundError: If no row matches both ID and caller
            TodoStoreError: If the store query fails
        """
        ...

    async def delete_all_todos(self, user_id: str) -> int:
        """
        Delete every todo owned by the caller.

        Returns:
            Number of deleted rows (zero is not an error)
        """
        ...
