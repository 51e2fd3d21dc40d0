"""
Client session management.

SessionManager wraps the Supabase auth primitives behind sign in, sign up
and sign out. It is an explicitly owned object: the CLI builds one at
startup, rehydrates it from storage, and hands it to everything that
needs the current user or token.
"""

import logging
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, Field
from supabase import AuthError, Client

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional["Session"]], None]


class SessionError(Exception):
    """Raised when the identity provider refuses a session operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionUser(BaseModel):
    """Cached identity of the signed-in user."""

    id: str
    email: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class Session(BaseModel):
    """An access token plus the identity it was issued for."""

    access_token: str
    refresh_token: str = ""
    expires_at: Optional[int] = None
    user: SessionUser


class SignUpResult(BaseModel):
    """Outcome of a sign up request."""

    user: Optional[SessionUser] = None
    pending_confirmation: bool = True


class SessionManager:
    """
    Owns the client's auth session for the lifetime of the process.

    Views read the session through the ``session``/``user``/``access_token``
    accessors, and may ``subscribe`` to be told when it changes.
    """

    def __init__(self, client: Client):
        self._client = client
        self._session: Optional[Session] = None
        self._listeners: list[SessionListener] = []

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def provider(self) -> Client:
        """The Supabase client holding this session."""
        return self._client

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user(self) -> Optional[SessionUser]:
        return self._session.user if self._session else None

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a callback for session changes.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def restore(self) -> Optional[Session]:
        """
        Rehydrate the session persisted by a previous run.

        An expired session is refreshed by the provider on read; if the
        refresh is refused the user is simply signed out.

        Raises:
            SessionError: If the provider cannot be reached
        """
        try:
            raw = self._client.auth.get_session()
        except AuthError as e:
            logger.info("Stored session could not be restored: %s", e)
            raw = None
        except httpx.HTTPError as e:
            raise SessionError(f"Could not reach the authentication server: {e}") from e
        self._set(self._map_session(raw) if raw else None)
        return self._session

    def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            SessionError: If the credentials are rejected
        """
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise SessionError(_message(e, "Failed to sign in. Please check your credentials.")) from e

        if response.session is None:
            raise SessionError("Failed to sign in. Please check your credentials.")

        session = self._map_session(response.session)
        self._set(session)
        logger.info("Signed in as %s", session.user.id)
        return session

    def sign_up(self, email: str, password: str) -> SignUpResult:
        """
        Register a new account.

        Most projects require email confirmation, in which case no session
        is returned and the result is pending confirmation.

        Raises:
            SessionError: If the provider refuses the registration
        """
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            raise SessionError(_message(e, "Failed to create an account")) from e

        user = self._map_user(response.user) if response.user else None
        if response.session is not None:
            self._set(self._map_session(response.session))
            return SignUpResult(user=user, pending_confirmation=False)
        return SignUpResult(user=user, pending_confirmation=True)

    def sign_out(self) -> None:
        """Invalidate the session locally and with the provider."""
        try:
            self._client.auth.sign_out()
        except AuthError as e:
            # the local session is dropped regardless
            logger.warning("Provider sign out failed: %s", e)
        self._set(None)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _set(self, session: Optional[Session]) -> None:
        changed = session != self._session
        self._session = session
        if changed:
            for listener in list(self._listeners):
                listener(session)

    def _map_session(self, raw: Any) -> Session:
        return Session(
            access_token=raw.access_token,
            refresh_token=getattr(raw, "refresh_token", None) or "",
            expires_at=getattr(raw, "expires_at", None),
            user=self._map_user(raw.user),
        )

    def _map_user(self, raw: Any) -> SessionUser:
        return SessionUser(
            id=str(raw.id),
            email=getattr(raw, "email", None) or "",
            metadata=getattr(raw, "user_metadata", None) or {},
        )


def _message(error: Exception, fallback: str) -> str:
    return getattr(error, "message", None) or str(error) or fallback
