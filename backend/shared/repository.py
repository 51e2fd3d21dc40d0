"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic mapping internally.

    Example:
        class TodoRepository(BaseRepository[Todo]):
            def list_for_user(self, user_id: str) -> list[Todo]:
                result = self._db.table("todos").select("*").eq("user_id", user_id).execute()
                return [self._map_to_todo(row) for row in result.data]
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
