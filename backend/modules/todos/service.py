"""
Todos service implementation.

Each operation is a single scoped query; there is no compensating logic.
"""

import logging

from .interfaces import ITodoService
from .models import CreateTodoRequest, Todo, UpdateTodoRequest
from .repository import TodoRepository
from .exceptions import TodoNotFoundError

logger = logging.getLogger(__name__)


class TodoService(ITodoService):
    """
    Todo service backed by TodoRepository.

    Implements ITodoService. Ownership is enforced by passing the
    caller's ID down to every repository query.
    """

    def __init__(self, repository: TodoRepository):
        self._repo = repository

    async def list_todos(self, user_id: str) -> list[Todo]:
        """List the caller's todos."""
        logger.debug("Fetching todos for user: %s", user_id)
        return self._repo.list_for_user(user_id)

    async def create_todo(self, user_id: str, request: CreateTodoRequest) -> Todo:
        """Create a todo owned by the caller."""
        todo = self._repo.insert(user_id, request.task, request.due_date)
        logger.info("Todo %s created for user %s", todo.id, user_id)
        return todo

    async def update_todo(
        self,
        todo_id: str,
        user_id: str,
        request: UpdateTodoRequest,
    ) -> Todo:
        """Update an owned todo or raise TodoNotFoundError."""
        todo = self._repo.update_owned(
            todo_id,
            user_id,
            {
                "task": request.task,
                "completed": request.completed,
                "date": request.due_date,
            },
        )
        if todo is None:
            logger.info("Update of todo %s by user %s matched no rows", todo_id, user_id)
            raise TodoNotFoundError(todo_id)
        return todo

    async def delete_todo(self, todo_id: str, user_id: str) -> None:
        """Delete an owned todo or raise TodoNotFoundError."""
        if not self._repo.delete_owned(todo_id, user_id):
            logger.info("Delete of todo %s by user %s matched no rows", todo_id, user_id)
            raise TodoNotFoundError(todo_id)

    async def delete_all_todos(self, user_id: str) -> int:
        """Delete all of the caller's todos."""
        deleted = self._repo.delete_all_for_user(user_id)
        logger.info("Deleted %d todos for user %s", deleted, user_id)
        return deleted

