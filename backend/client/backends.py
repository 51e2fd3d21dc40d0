"""
Todo data paths for the client.

Two implementations share one protocol:

- DirectTodoBackend talks to Supabase with the user's own session, so
  row level security applies; it also filters by owner explicitly.
- ApiTodoBackend goes through the API server, which re-verifies the
  bearer token before touching the store.
"""

import logging
from datetime import date
from typing import Any, Optional, Protocol, runtime_checkable

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError

from modules.todos.models import Todo
from .session import SessionManager

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A todo operation failed; ``message`` is shown to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@runtime_checkable
class ITodoBackend(Protocol):
    """Operations the todo store needs from a data path."""

    def list_todos(self) -> list[Todo]: ...

    def create_todo(self, task: str, due: Optional[date] = None) -> Todo: ...

    def update_todo(
        self,
        todo_id: str,
        task: str,
        completed: bool,
        due: Optional[date] = None,
    ) -> Todo: ...

    def delete_todo(self, todo_id: str) -> None: ...

    def delete_all(self) -> None: ...


def _iso(due: Optional[date]) -> Optional[str]:
    return due.isoformat() if due else None


def _to_todo(row: Any) -> Todo:
    try:
        return Todo.model_validate(row)
    except ValidationError as e:
        logger.error("Unexpected todo row: %s", e)
        raise BackendError("Received an invalid todo from the server") from e


class DirectTodoBackend:
    """Todo operations straight against Supabase with the user's token."""

    def __init__(self, sessions: SessionManager):
        self._sessions = sessions

    def list_todos(self) -> list[Todo]:
        rows = self._run(
            self._table().select("*").eq("user_id", self._user_id()).order("created_at", desc=True)
        )
        return [_to_todo(r) for r in rows]

    def create_todo(self, task: str, due: Optional[date] = None) -> Todo:
        rows = self._run(
            self._table().insert(
                {
                    "task": task,
                    "user_id": self._user_id(),
                    "completed": False,
                    "date": _iso(due),
                }
            )
        )
        return _to_todo(rows[0])

    def update_todo(
        self,
        todo_id: str,
        task: str,
        completed: bool,
        due: Optional[date] = None,
    ) -> Todo:
        rows = self._run(
            self._table()
            .update({"task": task, "completed": completed, "date": _iso(due)})
            .eq("id", todo_id)
            .eq("user_id", self._user_id())
        )
        if not rows:
            raise BackendError("Todo not found", status_code=404)
        return _to_todo(rows[0])

    def delete_todo(self, todo_id: str) -> None:
        rows = self._run(
            self._table().delete().eq("id", todo_id).eq("user_id", self._user_id())
        )
        if not rows:
            raise BackendError("Todo not found", status_code=404)

    def delete_all(self) -> None:
        self._run(self._table().delete().eq("user_id", self._user_id()))

    def _table(self) -> Any:
        return self._sessions.provider.table("todos")

    def _user_id(self) -> str:
        user = self._sessions.user
        if user is None:
            raise BackendError("Not signed in", status_code=401)
        return user.id

    def _run(self, query: Any) -> list[dict[str, Any]]:
        try:
            return query.execute().data or []
        except APIError as e:
            logger.error("Supabase error: %s", e.message)
            raise BackendError(e.message or str(e)) from e
        except httpx.HTTPError as e:
            raise BackendError(str(e)) from e


class ApiTodoBackend:
    """Todo operations through the API server."""

    def __init__(
        self,
        base_url: str,
        sessions: SessionManager,
        http: Optional[httpx.Client] = None,
    ):
        self._sessions = sessions
        self._http = http or httpx.Client(base_url=base_url)

    def list_todos(self) -> list[Todo]:
        response = self._request("GET", "/api/todos")
        return [_to_todo(r) for r in _json(response)]

    def create_todo(self, task: str, due: Optional[date] = None) -> Todo:
        response = self._request("POST", "/api/todos", json={"task": task, "due_date": _iso(due)})
        return _to_todo(_json(response))

    def update_todo(
        self,
        todo_id: str,
        task: str,
        completed: bool,
        due: Optional[date] = None,
    ) -> Todo:
        response = self._request(
            "PUT",
            f"/api/todos/{todo_id}",
            json={"task": task, "completed": completed, "due_date": _iso(due)},
        )
        return _to_todo(_json(response))

    def delete_todo(self, todo_id: str) -> None:
        self._request("DELETE", f"/api/todos/{todo_id}")

    def delete_all(self) -> None:
        self._request("DELETE", "/api/todos")

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        token = self._sessions.access_token
        if not token:
            raise BackendError("Not signed in", status_code=401)

        try:
            response = self._http.request(
                method,
                path,
                headers={"Authorization": f"Bearer {token}"},
                **kwargs,
            )
        except httpx.HTTPError as e:
            raise BackendError(f"Could not reach the API: {e}") from e

        if response.is_error:
            raise BackendError(_error_message(response), status_code=response.status_code)
        return response


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise BackendError(
            "Received an unreadable response from the API",
            status_code=response.status_code,
        ) from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, list):
        # FastAPI validation errors
        return "; ".join(str(d.get("msg", d)) for d in detail)
    return str(detail or body)
