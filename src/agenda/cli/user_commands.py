"""User account CLI commands."""

import typer
from sqlalchemy.exc import SQLAlchemyError

from src.agenda.core.i18n import t
from src.agenda.core.services.auth import AuthError, AuthService
from src.agenda.core.services.database import DbSessionService
from src.agenda.core.services.session import UserSessionService
from src.agenda.core.storage.session_storage import InMemorySessionStorage

from .utils import console

users_app = typer.Typer(help="👤 Manage user accounts")


@users_app.command("add")
def add_user(
    email: str = typer.Argument(..., help="Email address used to sign in"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password"
    ),
    full_name: str = typer.Option("", "--full-name", "-n", help="Name shown in the header"),
) -> None:
    """Create a user together with their profile."""
    # No session is started, so throwaway storage is enough
    auth_service = AuthService(UserSessionService(InMemorySessionStorage()))

    try:
        with DbSessionService().session_scope() as db:
            user = auth_service.register_user(db, email, password, full_name)
    except AuthError as e:
        console.print(f"[red]❌ {t(e.message_key)}: {email}[/red]")
        raise typer.Exit(code=1) from e
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to create user: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{user.email}' ({user.id})[/green]")
