"""Database schema CLI commands."""

import typer
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from src.agenda.core.services.database import DbManageService, DbSessionService
from src.agenda.core.services.database.migrations import MIGRATIONS, applied_versions

from .utils import console

db_app = typer.Typer(help="🗄️  Database schema commands")


def _manage_service() -> DbManageService:
    return DbManageService(DbSessionService().engine)


@db_app.command("init")
def init() -> None:
    """Create all tables and apply pending migrations."""
    service = _manage_service()
    try:
        service.create_all()
        applied = service.migrate()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database initialization failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print("[green]✅ Tables created[/green]")
    _print_applied(applied)


@db_app.command("migrate")
def migrate() -> None:
    """Apply pending schema migrations only."""
    try:
        applied = _manage_service().migrate()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Migration failed: {e}[/red]")
        raise typer.Exit(code=1) from e
    _print_applied(applied)


@db_app.command("status")
def status() -> None:
    """Show which migrations have been applied."""
    done = applied_versions(DbSessionService().engine)

    table = Table(title="Schema migrations")
    table.add_column("Version", style="cyan")
    table.add_column("Description")
    table.add_column("Applied", style="yellow")
    for migration in MIGRATIONS:
        table.add_row(
            migration.version,
            migration.description,
            "✅" if migration.version in done else "❌",
        )
    console.print(table)


def _print_applied(applied: list[str]) -> None:
    if not applied:
        console.print("[blue]Schema is up to date[/blue]")
        return
    for version in applied:
        console.print(f"[green]✅ Applied {version}[/green]")
