"""Tests for SessionManager."""

from types import SimpleNamespace

import httpx
import pytest
from supabase import AuthError

from client.session import SessionError, SessionManager
from tests.client.conftest import raw_session, raw_user


class ProviderAuthError(AuthError):
    def __init__(self, message: str):
        Exception.__init__(self, message)
        self.message = message
        self.code = None


@pytest.fixture
def manager(provider) -> SessionManager:
    return SessionManager(provider)


class TestSignIn:
    def test_success(self, manager, provider):
        provider.auth.sign_in_with_password.return_value = SimpleNamespace(
            session=raw_session(), user=raw_user()
        )

        session = manager.sign_in("ann@example.com", "hunter22")

        provider.auth.sign_in_with_password.assert_called_once_with(
            {"email": "ann@example.com", "password": "hunter22"}
        )
        assert session.access_token == "access-1"
        assert manager.is_authenticated
        assert manager.access_token == "access-1"
        assert manager.user.id == "user-1"
        assert manager.user.metadata == {"display_name": "Ann"}

    def test_rejected_credentials(self, manager, provider):
        provider.auth.sign_in_with_password.side_effect = ProviderAuthError("Invalid login credentials")

        with pytest.raises(SessionError, match="Invalid login credentials"):
            manager.sign_in("ann@example.com", "wrong")
        assert not manager.is_authenticated
        assert manager.access_token is None

    def test_no_session_returned(self, manager, provider):
        provider.auth.sign_in_with_password.return_value = SimpleNamespace(session=None, user=None)

        with pytest.raises(SessionError, match="Failed to sign in"):
            manager.sign_in("ann@example.com", "pw")


class TestSignUp:
    def test_pending_confirmation(self, manager, provider):
        provider.auth.sign_up.return_value = SimpleNamespace(session=None, user=raw_user())

        result = manager.sign_up("ann@example.com", "hunter22")

        assert result.pending_confirmation is True
        assert result.user.email == "ann@example.com"
        assert not manager.is_authenticated

    def test_signed_in_immediately(self, manager, provider):
        provider.auth.sign_up.return_value = SimpleNamespace(session=raw_session(), user=raw_user())

        result = manager.sign_up("ann@example.com", "hunter22")

        assert result.pending_confirmation is False
        assert manager.is_authenticated

    def test_refused(self, manager, provider):
        provider.auth.sign_up.side_effect = ProviderAuthError("User already registered")

        with pytest.raises(SessionError, match="User already registered"):
            manager.sign_up("ann@example.com", "hunter22")


class TestRestoreAndSignOut:
    def test_restore_persisted_session(self, manager, provider):
        provider.auth.get_session.return_value = raw_session("stored")

        assert manager.restore().access_token == "stored"
        assert manager.is_authenticated

    def test_restore_without_session(self, manager):
        assert manager.restore() is None
        assert not manager.is_authenticated

    def test_restore_refused_refresh(self, manager, provider):
        provider.auth.get_session.side_effect = ProviderAuthError("Invalid Refresh Token")

        assert manager.restore() is None

    def test_restore_unreachable_provider(self, manager, provider):
        provider.auth.get_session.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(SessionError, match="Could not reach the authentication server"):
            manager.restore()
        assert not manager.is_authenticated

    def test_sign_out_clears(self, manager, provider):
        provider.auth.get_session.return_value = raw_session()
        manager.restore()

        manager.sign_out()

        provider.auth.sign_out.assert_called_once()
        assert manager.session is None
        assert manager.user is None

    def test_sign_out_clears_even_if_provider_fails(self, manager, provider):
        provider.auth.get_session.return_value = raw_session()
        manager.restore()
        provider.auth.sign_out.side_effect = ProviderAuthError("network down")

        manager.sign_out()

        assert not manager.is_authenticated


class TestSubscribe:
    def test_listener_sees_changes(self, manager, provider):
        seen = []
        manager.subscribe(seen.append)
        provider.auth.get_session.return_value = raw_session()

        manager.restore()
        manager.sign_out()

        assert [s.access_token if s else None for s in seen] == ["access-1", None]

    def test_no_notification_without_change(self, manager):
        seen = []
        manager.subscribe(seen.append)

        manager.restore()
        manager.sign_out()

        assert seen == []

    def test_unsubscribe(self, manager, provider):
        seen = []
        unsubscribe = manager.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        provider.auth.get_session.return_value = raw_session()

        manager.restore()

        assert seen == []
