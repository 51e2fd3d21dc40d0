"""
Tests for the bearer token authentication middleware.
"""

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from tests.conftest import ALICE_TOKEN, ORPHAN_TOKEN


class TestMissingCredentials:
    """Requests without a usable bearer token get 401 and never reach the store."""

    def test_missing_auth_header(self, client, fake_auth, fake_repo):
        response = client.get("/api/todos")
        assert response.status_code == 401
        assert response.json()["detail"] == "Access token required"
        assert response.headers["www-authenticate"] == "Bearer"
        assert fake_auth.calls == []
        assert fake_repo.calls == []

    @pytest.mark.parametrize("header", ["Bearer", "Basic dXNlcjpwYXNz", "Token abc", "garbage"])
    def test_malformed_auth_header(self, client, fake_auth, fake_repo, header):
        response = client.get("/api/todos", headers={"Authorization": header})
        assert response.status_code == 401
        assert fake_auth.calls == []
        assert fake_repo.calls == []

    @pytest.mark.parametrize(
        "method,path",
        [
            ("post", "/api/todos"),
            ("put", "/api/todos/1"),
            ("delete", "/api/todos/1"),
            ("delete", "/api/todos"),
            ("get", "/api/users/me"),
        ],
    )
    def test_every_protected_route_requires_token(self, client, fake_repo, method, path):
        kwargs = {"json": {"task": "x", "completed": False}} if method in ("post", "put") else {}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 401
        assert fake_repo.calls == []


class TestInvalidCredentials:
    """Tokens the provider rejects get 403 and never reach the store."""

    def test_invalid_token(self, client, fake_auth, fake_repo):
        response = client.get("/api/todos", headers={"Authorization": "Bearer not-a-real-token"})
        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid token"
        assert fake_auth.calls == ["not-a-real-token"]
        assert fake_repo.calls == []

    def test_token_without_user(self, client, fake_repo):
        response = client.get("/api/todos", headers={"Authorization": f"Bearer {ORPHAN_TOKEN}"})
        assert response.status_code == 403
        assert response.json()["detail"] == "User not found"
        assert fake_repo.calls == []

    def test_invalid_token_on_delete(self, client, fake_repo, alice):
        todo = fake_repo.seed(alice.id, "keep me")
        response = client.delete(f"/api/todos/{todo.id}", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 403
        assert todo.id in fake_repo.rows


class TestValidCredentials:

    def test_valid_token_reaches_handler(self, client, alice_headers, fake_auth):
        response = client.get("/api/todos", headers=alice_headers)
        assert response.status_code == 200
        assert fake_auth.calls == [ALICE_TOKEN]

    def test_token_is_verified_on_every_request(self, client, alice_headers, fake_auth):
        client.get("/api/todos", headers=alice_headers)
        client.get("/api/todos", headers=alice_headers)
        assert fake_auth.calls == [ALICE_TOKEN, ALICE_TOKEN]


class TestRequestContext:
    """The resolved user is attached to the request for downstream code."""

    @pytest.fixture
    def context_app(self, fake_auth):
        app = FastAPI()
        app.dependency_overrides[get_auth_service] = lambda: fake_auth

        @app.get("/whoami")
        async def whoami(request: Request, user=Depends(get_current_user)):
            return {"state": request.state.user.id, "user": user.id}

        return app

    def test_user_attached_to_request_state(self, context_app, alice_headers):
        response = TestClient(context_app).get("/whoami", headers=alice_headers)
        assert response.json() == {"state": "alice-id", "user": "alice-id"}
