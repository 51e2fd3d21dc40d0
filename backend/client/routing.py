"""
View routing with a signed-in guard.

Protected views redirect anonymous visitors to the login view and
remember where they were going, so the visit can be replayed after a
successful sign in. The remembered location is persisted next to the
auth session, since each CLI invocation is a separate process.
"""

from typing import Protocol

from .session import SessionManager

LOGIN_PATH = "/login"
HOME_PATH = "/"
PROFILE_PATH = "/profile"

REDIRECT_KEY = "todo.redirect_to"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> "str | None": ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class Navigator:
    """Resolves which view to show for a requested location."""

    def __init__(self, sessions: SessionManager, storage: KeyValueStorage):
        self._sessions = sessions
        self._storage = storage

    def guard(self, location: str) -> str:
        """
        Return the location to render for a protected view.

        Anonymous visitors get the login view; the requested location is
        remembered for ``complete_login``.
        """
        if self._sessions.is_authenticated:
            return location
        self._storage.set_item(REDIRECT_KEY, location)
        return LOGIN_PATH

    @property
    def pending_location(self) -> "str | None":
        return self._storage.get_item(REDIRECT_KEY)

    def complete_login(self) -> str:
        """Consume the remembered location, defaulting to the home view."""
        location = self._storage.get_item(REDIRECT_KEY)
        self._storage.remove_item(REDIRECT_KEY)
        return location or HOME_PATH
