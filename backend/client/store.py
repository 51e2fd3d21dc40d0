"""
View-local todo state with optimistic updates.

Every mutation is applied to the local list first and tracked as a
PendingMutation. When the backend answers, the mutation is confirmed and
the returned row replaces the optimistic one; when it fails, the list is
restored from the snapshot taken before the change.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional

from modules.todos.models import Todo, TodoFilter
from .backends import BackendError, ITodoBackend
from .notifications import Notifications

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "pending-"


class MutationState(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class PendingMutation:
    """One optimistic change awaiting the backend's answer."""

    kind: str
    snapshot: list[Todo]
    state: MutationState = MutationState.PENDING
    error: Optional[str] = None
    result: Optional[Todo] = field(default=None, repr=False)

    def confirm(self, result: Optional[Todo] = None) -> None:
        self._leave_pending(MutationState.CONFIRMED)
        self.result = result

    def roll_back(self, error: str) -> None:
        self._leave_pending(MutationState.ROLLED_BACK)
        self.error = error

    def _leave_pending(self, target: MutationState) -> None:
        if self.state is not MutationState.PENDING:
            raise RuntimeError(f"{self.kind} mutation is already {self.state.value}")
        self.state = target


class TodoStore:
    """
    The signed-in user's todos, fetched once per session.

    Methods run one at a time; each issues at most one backend request.
    """

    def __init__(self, backend: ITodoBackend, notifications: Notifications):
        self._backend = backend
        self._notifications = notifications
        self._todos: list[Todo] = []
        self._has_fetched = False
        self.last_mutation: Optional[PendingMutation] = None

    @property
    def todos(self) -> list[Todo]:
        return list(self._todos)

    @property
    def has_fetched(self) -> bool:
        return self._has_fetched

    def visible(self, todo_filter: TodoFilter = TodoFilter.ALL) -> list[Todo]:
        """Partition the fetched list locally; never issues a request."""
        return [t for t in self._todos if todo_filter.matches(t)]

    def get(self, todo_id: str) -> Optional[Todo]:
        return next((t for t in self._todos if t.id == todo_id), None)

    def reset(self, *_: object) -> None:
        """Forget everything; used as a session-change listener."""
        self._todos = []
        self._has_fetched = False
        self.last_mutation = None

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> list[Todo]:
        """Fetch the list unless it was already fetched this session."""
        if not self._has_fetched:
            self.refresh()
        return self.todos

    def refresh(self) -> list[Todo]:
        self._notifications.dismiss_error()
        try:
            self._todos = self._backend.list_todos()
            self._has_fetched = True
        except BackendError as e:
            logger.error("Error fetching todos: %s", e.message)
            self._notifications.error(e.message or "Failed to fetch todos")
        return self.todos

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, task: str, due: Optional[date] = None) -> Optional[PendingMutation]:
        """Add a todo at the top of the list. Blank tasks are ignored."""
        if not task.strip():
            return None

        placeholder = Todo(
            id=f"{PLACEHOLDER_PREFIX}{uuid.uuid4().hex}",
            user_id="",
            task=task,
            date=due,
        )
        return self._mutate(
            "add",
            apply=lambda todos: [placeholder, *todos],
            call=lambda: self._backend.create_todo(task, due),
            replace_id=placeholder.id,
            success="Task added successfully",
        )

    def toggle(self, todo_id: str) -> Optional[PendingMutation]:
        """Flip a todo's completed flag."""
        todo = self._require(todo_id)
        if todo is None:
            return None
        flipped = todo.model_copy(update={"completed": not todo.completed})
        return self._mutate(
            "toggle",
            apply=lambda todos: _replace(todos, todo_id, flipped),
            call=lambda: self._backend.update_todo(todo_id, todo.task, flipped.completed, todo.date),
            replace_id=todo_id,
        )

    def edit(self, todo_id: str, task: str, due: Optional[date]) -> Optional[PendingMutation]:
        """Change a todo's text and due date."""
        todo = self._require(todo_id)
        if todo is None or not task.strip():
            return None
        edited = todo.model_copy(update={"task": task, "date": due})
        return self._mutate(
            "edit",
            apply=lambda todos: _replace(todos, todo_id, edited),
            call=lambda: self._backend.update_todo(todo_id, task, todo.completed, due),
            replace_id=todo_id,
            success="Task updated successfully",
        )

    def delete(self, todo_id: str) -> Optional[PendingMutation]:
        if self._require(todo_id) is None:
            return None
        return self._mutate(
            "delete",
            apply=lambda todos: [t for t in todos if t.id != todo_id],
            call=lambda: self._backend.delete_todo(todo_id),
            success="Task deleted successfully",
        )

    def delete_all(self) -> PendingMutation:
        return self._mutate(
            "delete_all",
            apply=lambda todos: [],
            call=self._backend.delete_all,
            success="All tasks deleted successfully",
        )

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _require(self, todo_id: str) -> Optional[Todo]:
        todo = self.get(todo_id)
        if todo is None:
            self._notifications.error(f"Todo not found: {todo_id}")
        return todo

    def _mutate(
        self,
        kind: str,
        apply: Callable[[list[Todo]], list[Todo]],
        call: Callable[[], Optional[Todo]],
        replace_id: Optional[str] = None,
        success: Optional[str] = None,
    ) -> PendingMutation:
        self._notifications.dismiss_error()
        mutation = PendingMutation(kind=kind, snapshot=list(self._todos))
        self.last_mutation = mutation
        self._todos = apply(self._todos)

        try:
            result = call()
        except BackendError as e:
            self._todos = mutation.snapshot
            mutation.roll_back(e.message)
            logger.error("Error in %s: %s", kind, e.message)
            self._notifications.error(e.message or f"Failed to {kind.replace('_', ' ')} todo")
            return mutation
        except Exception as e:
            # unexpected failures still settle the mutation
            self._todos = mutation.snapshot
            mutation.roll_back(str(e) or type(e).__name__)
            raise

        if replace_id is not None and result is not None:
            self._todos = _replace(self._todos, replace_id, result)
        mutation.confirm(result)
        if success:
            self._notifications.success(success)
        return mutation


def _replace(todos: list[Todo], todo_id: str, new: Todo) -> list[Todo]:
    return [new if t.id == todo_id else t for t in todos]
