"""
Todo repository for database access.

Encapsulates all Supabase queries and data mapping for the ``todos`` table.
Every method takes the caller's user ID and applies it as a predicate, so
no query can reach a row owned by someone else.
"""

import logging
from datetime import date
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository
from .exceptions import TodoStoreError
from .models import Todo

logger = logging.getLogger(__name__)

TABLE = "todos"


class TodoRepository(BaseRepository[Todo]):
    """
    Repository for todo data access.

    Store failures are raised as TodoStoreError carrying the provider's
    raw message.
    """

    def list_for_user(self, user_id: str) -> list[Todo]:
        """
        List all todos owned by a user, newest first.

        Args:
            user_id: The owner's ID.

        Returns:
            Every matching row; there is no pagination.
        """
        result = self._execute(
            self._db.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        return [self._map_to_todo(row) for row in result.data]

    def insert(self, user_id: str, task: str, due: Optional[date] = None) -> Todo:
        """
        Insert a new, uncompleted todo for a user.

        Returns:
            The created row with store-generated ID and timestamps.
        """
        data = {
            "task": task,
            "user_id": user_id,
            "completed": False,
            "date": due.isoformat() if due else None,
        }
        result = self._execute(self._db.table(TABLE).insert(data))
        return self._map_to_todo(result.data[0])

    def update_owned(
        self,
        todo_id: str,
        user_id: str,
        fields: dict[str, Any],
    ) -> Optional[Todo]:
        """
        Update a todo matched by both ID and owner.

        ``user_id`` is never written, even if present in ``fields``.

        Returns:
            The updated row, or None if no owned row matched.
        """
        data = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        if isinstance(data.get("date"), date):
            data["date"] = data["date"].isoformat()

        result = self._execute(
            self._db.table(TABLE)
            .update(data)
            .eq("id", todo_id)
            .eq("user_id", user_id)
        )
        if not result.data:
            return None
        return self._map_to_todo(result.data[0])

    def delete_owned(self, todo_id: str, user_id: str) -> bool:
        """
        Delete a todo matched by both ID and owner.

        Returns:
            True if a row was deleted.
        """
        result = self._execute(
            self._db.table(TABLE)
            .delete()
            .eq("id", todo_id)
            .eq("user_id", user_id)
        )
        return bool(result.data)

    def delete_all_for_user(self, user_id: str) -> int:
        """
        Delete every todo owned by a user.

        Returns:
            Number of deleted rows.
        """
        result = self._execute(
            self._db.table(TABLE).delete().eq("user_id", user_id)
        )
        return len(result.data or [])

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _execute(self, query: Any) -> Any:
        """Run a query builder, converting provider failures."""
        try:
            return query.execute()
        except APIError as e:
            logger.error("Supabase error: %s", e.message)
            raise TodoStoreError(e.message or str(e)) from e
        except httpx.HTTPError as e:
            logger.error("Supabase transport error: %s", e)
            raise TodoStoreError(str(e)) from e

    def _map_to_todo(self, data: dict[str, Any]) -> Todo:
        """Map database row to Todo model."""
        return Todo(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            task=data["task"],
            completed=data.get("completed", False),
            date=data.get("date"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

