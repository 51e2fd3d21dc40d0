"""
Todo client.

Terminal rendition of the todo single-page app: a persisted Supabase
session, a navigator guarding protected views, an optimistic todo store,
and two interchangeable data paths (direct to Supabase, or via the API).
"""

from .config import ClientSettings
from .session import SessionManager, Session, SessionError, SignUpResult
from .store import TodoStore, MutationState, PendingMutation

__all__ = [
    "ClientSettings",
    "SessionManager",
    "Session",
    "SessionError",
    "SignUpResult",
    "TodoStore",
    "MutationState",
    "PendingMutation",
]
