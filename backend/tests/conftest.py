"""
Shared test fixtures and utilities.

Provides in-memory stand-ins for the identity provider and the todos
table so API tests can exercise the real routes, middleware and service
without a Supabase project.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, get_todo_service, reset_container
from modules.auth.exceptions import InvalidTokenError, MissingTokenError, UserNotFoundError
from modules.todos.exceptions import TodoStoreError
from modules.todos.models import Todo
from modules.todos.service import TodoService
from shared.models import AuthenticatedUser

ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"
ORPHAN_TOKEN = "orphan-token"  # accepted by the provider, but resolves no user


class FakeAuthService:
    """Identity provider stand-in keyed by token."""

    def __init__(self, users: dict[str, AuthenticatedUser]):
        self.users = users
        self.calls: list[str] = []

    async def validate_token(self, token: str) -> AuthenticatedUser:
        self.calls.append(token)
        if not token:
            raise MissingTokenError()
        if token == ORPHAN_TOKEN:
            raise UserNotFoundError()
        user = self.users.get(token)
        if user is None:
            raise InvalidTokenError()
        return user


class FakeTodoRepository:
    """
    In-memory todos table with the same ownership predicates as
    TodoRepository. Records every call so tests can assert that
    rejected requests never reach the store.
    """

    def __init__(self) -> None:
        self.rows: dict[str, Todo] = {}
        self.calls: list[str] = []
        self.fail_with: Optional[str] = None
        self._next_id = 1
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with:
            raise TodoStoreError(self.fail_with)

    def seed(self, user_id: str, task: str, completed: bool = False) -> Todo:
        todo = self._new(user_id, task, None)
        todo = todo.model_copy(update={"completed": completed})
        self.rows[todo.id] = todo
        return todo

    def _new(self, user_id: str, task: str, due: Any) -> Todo:
        created = self._epoch + timedelta(seconds=self._next_id)
        todo = Todo(
            id=str(self._next_id),
            user_id=user_id,
            task=task,
            completed=False,
            date=due,
            created_at=created,
            updated_at=created,
        )
        self._next_id += 1
        return todo

    def list_for_user(self, user_id: str) -> list[Todo]:
        self._record("list_for_user")
        owned = [t for t in self.rows.values() if t.user_id == user_id]
        return sorted(owned, key=lambda t: t.created_at, reverse=True)

    def insert(self, user_id: str, task: str, due: Any = None) -> Todo:
        self._record("insert")
        todo = self._new(user_id, task, due)
        self.rows[todo.id] = todo
        return todo

    def update_owned(self, todo_id: str, user_id: str, fields: dict[str, Any]) -> Optional[Todo]:
        self._record("update_owned")
        todo = self.rows.get(todo_id)
        if todo is None or todo.user_id != user_id:
            return None
        data = {k: v for k, v in fields.items() if k not in ("id", "user_id")}
        updated = todo.model_copy(update=data)
        self.rows[todo_id] = updated
        return updated

    def delete_owned(self, todo_id: str, user_id: str) -> bool:
        self._record("delete_owned")
        todo = self.rows.get(todo_id)
        if todo is None or todo.user_id != user_id:
            return False
        del self.rows[todo_id]
        return True

    def delete_all_for_user(self, user_id: str) -> int:
        self._record("delete_all_for_user")
        owned = [k for k, t in self.rows.items() if t.user_id == user_id]
        for k in owned:
            del self.rows[k]
        return len(owned)


def make_user(user_id: str, email: str) -> AuthenticatedUser:
    return AuthenticatedUser(id=user_id, email=email, metadata={"name": user_id})


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def alice() -> AuthenticatedUser:
    return make_user("alice-id", "alice@example.com")


@pytest.fixture
def bob() -> AuthenticatedUser:
    return make_user("bob-id", "bob@example.com")


@pytest.fixture
def fake_auth(alice, bob) -> FakeAuthService:
    return FakeAuthService({ALICE_TOKEN: alice, BOB_TOKEN: bob})


@pytest.fixture
def fake_repo() -> FakeTodoRepository:
    return FakeTodoRepository()


@pytest.fixture
def app(fake_auth, fake_repo):
    """A fresh app wired to the in-memory provider and table."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: fake_auth
    app.dependency_overrides[get_todo_service] = lambda: TodoService(repository=fake_repo)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {BOB_TOKEN}"}
