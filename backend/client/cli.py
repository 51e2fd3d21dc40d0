"""
Terminal views for the todo client.

Each subcommand is one user action: it restores the persisted session,
passes through the signed-in guard where needed, performs a single
operation and renders the result with rich.
"""

import argparse
import functools
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table
from supabase import ClientOptions, create_client

from modules.todos.models import TodoFilter
from .backends import ApiTodoBackend, DirectTodoBackend, ITodoBackend
from .config import ClientSettings
from .formatting import format_date_for_input, format_display_date, parse_input_date
from .notifications import BannerKind, Notifications
from .routing import HOME_PATH, LOGIN_PATH, PROFILE_PATH, Navigator
from .session import SessionError, SessionManager
from .storage import FileSessionStorage
from .store import TodoStore

logger = logging.getLogger(__name__)

console = Console()


@dataclass
class ClientApp:
    """Everything one CLI invocation needs, wired together."""

    settings: ClientSettings
    sessions: SessionManager
    navigator: Navigator
    notifications: Notifications
    store: TodoStore
    backend: ITodoBackend

    def close(self) -> None:
        close = getattr(self.backend, "close", None)
        if close is not None:
            close()


def build_app(
    settings: ClientSettings,
    provider=None,
    backend: Optional[ITodoBackend] = None,
) -> ClientApp:
    """Wire the session, navigator, backend and store for one run."""
    storage = FileSessionStorage(settings.session_file)
    if provider is None:
        provider = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=ClientOptions(
                storage=storage,
                persist_session=True,
                auto_refresh_token=settings.auto_refresh_token,
            ),
        )

    sessions = SessionManager(provider)
    if backend is None:
        if settings.backend == "api":
            backend = ApiTodoBackend(settings.api_url, sessions)
        else:
            backend = DirectTodoBackend(sessions)

    notifications = Notifications()
    store = TodoStore(backend, notifications)
    sessions.subscribe(store.reset)

    return ClientApp(
        settings=settings,
        sessions=sessions,
        navigator=Navigator(sessions, storage),
        notifications=notifications,
        store=store,
        backend=backend,
    )


# -----------------------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------------------


def render_banners(app: ClientApp) -> None:
    for banner in app.notifications.active():
        if banner.kind is BannerKind.ERROR:
            console.print(f"[bold white on red] ✗ {banner.message} [/]")
        elif "deleted" in banner.message:
            console.print(f"[bold white on magenta] ✓ {banner.message} [/]")
        elif "updated" in banner.message:
            console.print(f"[bold black on yellow] ✓ {banner.message} [/]")
        else:
            console.print(f"[bold white on green] ✓ {banner.message} [/]")


def render_todos(app: ClientApp, todo_filter: TodoFilter = TodoFilter.ALL) -> None:
    todos = app.store.visible(todo_filter)
    title = "Todo List" if todo_filter is TodoFilter.ALL else f"Todo List ({todo_filter.value})"
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("TASK")
    table.add_column("DATE")
    table.add_column("STATUS")

    for todo in todos:
        status = "[green]Completed[/green]" if todo.completed else "[yellow]Pending[/yellow]"
        table.add_row(todo.id, todo.task, format_display_date(todo.date), status)

    if not todos:
        console.print(f"[dim]{title}: nothing here yet.[/dim]")
    else:
        console.print(table)


def render_profile(app: ClientApp) -> None:
    user = app.sessions.user
    if user is None:
        return
    table = Table(title="Profile", show_header=False)
    table.add_row("Email", user.email)
    table.add_row("User ID", user.id)
    for key, value in sorted(user.metadata.items()):
        table.add_row(key, str(value))
    console.print(table)


def show(app: ClientApp, location: str) -> None:
    """Render the view for a location after the guard let it through."""
    if location == PROFILE_PATH:
        render_profile(app)
    else:
        app.store.load()
        render_todos(app)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

Handler = Callable[[ClientApp, argparse.Namespace], int]


def protected(location: str) -> Callable[[Handler], Handler]:
    """Run the handler only for a signed-in user."""

    def decorator(handler: Handler) -> Handler:
        @functools.wraps(handler)
        def wrapper(app: ClientApp, args: argparse.Namespace) -> int:
            if app.navigator.guard(location) == LOGIN_PATH:
                console.print("Please sign in first: [bold]todo login EMAIL[/bold]")
                return 1
            return handler(app, args)

        return wrapper

    return decorator


def cmd_login(app: ClientApp, args: argparse.Namespace) -> int:
    password = args.password or Prompt.ask("Password", password=True)
    try:
        app.sessions.sign_in(args.email, password)
    except SessionError as e:
        app.notifications.error(e.message)
        return 1
    console.print(f"Signed in as [bold]{args.email}[/bold]")
    show(app, app.navigator.complete_login())
    return 0


def cmd_signup(app: ClientApp, args: argparse.Namespace) -> int:
    password = args.password or Prompt.ask("Password", password=True)
    confirm = args.confirm_password or Prompt.ask("Confirm password", password=True)
    if password != confirm:
        app.notifications.error("Passwords do not match")
        return 1

    try:
        result = app.sessions.sign_up(args.email, password)
    except SessionError as e:
        app.notifications.error(e.message)
        return 1

    if result.pending_confirmation:
        app.notifications.success("Check your email for the confirmation link!")
    else:
        app.notifications.success("Registration successful!")
        show(app, app.navigator.complete_login())
    return 0


def cmd_logout(app: ClientApp, args: argparse.Namespace) -> int:
    app.sessions.sign_out()
    console.print("Signed out.")
    return 0


@protected(PROFILE_PATH)
def cmd_profile(app: ClientApp, args: argparse.Namespace) -> int:
    render_profile(app)
    return 0


@protected(HOME_PATH)
def cmd_list(app: ClientApp, args: argparse.Namespace) -> int:
    app.store.load()
    render_todos(app, TodoFilter(args.filter))
    return 0 if app.notifications.current_error is None else 1


@protected(HOME_PATH)
def cmd_add(app: ClientApp, args: argparse.Namespace) -> int:
    app.store.load()
    mutation = app.store.add(" ".join(args.task), args.due)
    render_todos(app)
    return _exit_code(app, mutation)


@protected(HOME_PATH)
def cmd_toggle(app: ClientApp, args: argparse.Namespace) -> int:
    app.store.load()
    mutation = app.store.toggle(args.id)
    render_todos(app)
    return _exit_code(app, mutation)


@protected(HOME_PATH)
def cmd_edit(app: ClientApp, args: argparse.Namespace) -> int:
    app.store.load()
    todo = app.store.get(args.id)
    if todo is None:
        app.notifications.error(f"Todo not found: {args.id}")
        return 1
    if args.task is None and args.due is None and not args.clear_due:
        # no flags: edit form pre-filled with the current values
        task = Prompt.ask("Task", default=todo.task)
        raw_due = Prompt.ask(
            "Due date (YYYY-MM-DD, empty for none)",
            default=format_date_for_input(todo.date),
        )
        try:
            due = parse_input_date(raw_due.strip())
        except ValueError:
            app.notifications.error(f"Invalid date: {raw_due}")
            return 1
    else:
        task = " ".join(args.task) if args.task else todo.task
        due = None if args.clear_due else (args.due or todo.date)
    mutation = app.store.edit(args.id, task, due)
    render_todos(app)
    return _exit_code(app, mutation)


@protected(HOME_PATH)
def cmd_delete(app: ClientApp, args: argparse.Namespace) -> int:
    app.store.load()
    mutation = app.store.delete(args.id)
    render_todos(app)
    return _exit_code(app, mutation)


@protected(HOME_PATH)
def cmd_delete_all(app: ClientApp, args: argparse.Namespace) -> int:
    if not args.yes and not Confirm.ask("Delete all of your tasks?"):
        return 0
    app.store.load()
    mutation = app.store.delete_all()
    return _exit_code(app, mutation)


def _exit_code(app: ClientApp, mutation) -> int:
    if mutation is None:
        return 0 if app.notifications.current_error is None else 1
    return 0 if mutation.error is None else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Multi-user todo list")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Sign in")
    p.add_argument("email")
    p.add_argument("--password")
    p.set_defaults(handler=cmd_login)

    p = sub.add_parser("signup", help="Create an account")
    p.add_argument("email")
    p.add_argument("--password")
    p.add_argument("--confirm-password")
    p.set_defaults(handler=cmd_signup)

    p = sub.add_parser("logout", help="Sign out")
    p.set_defaults(handler=cmd_logout)

    p = sub.add_parser("profile", help="Show your profile")
    p.set_defaults(handler=cmd_profile)

    p = sub.add_parser("list", help="List your tasks")
    p.add_argument("--filter", choices=[f.value for f in TodoFilter], default=TodoFilter.ALL.value)
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("add", help="Add a task")
    p.add_argument("task", nargs="+")
    p.add_argument("--due", type=parse_input_date, help="Due date (YYYY-MM-DD)")
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("toggle", help="Mark a task completed or pending")
    p.add_argument("id")
    p.set_defaults(handler=cmd_toggle)

    p = sub.add_parser("edit", help="Edit a task")
    p.add_argument("id")
    p.add_argument("--task", nargs="+")
    due = p.add_mutually_exclusive_group()
    due.add_argument("--due", type=parse_input_date, help="New due date (YYYY-MM-DD)")
    due.add_argument("--clear-due", action="store_true", help="Remove the due date")
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("delete", help="Delete a task")
    p.add_argument("id")
    p.set_defaults(handler=cmd_delete)

    p = sub.add_parser("delete-all", help="Delete all of your tasks")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    p.set_defaults(handler=cmd_delete_all)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = ClientSettings()
    except ValidationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 2

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = build_app(settings)
    try:
        try:
            app.sessions.restore()
        except SessionError as e:
            app.notifications.error(e.message)
            return 1
        return args.handler(app, args)
    finally:
        render_banners(app)
        app.close()
