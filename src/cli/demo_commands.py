"""Demo CLI commands."""

import typer
from rich.panel import Panel
from rich.prompt import Confirm

from src.crud_demo.core.exceptions import DemoError
from src.crud_demo.core.services.database import DbManageService, connect
from src.crud_demo.demo.runner import run_demo
from src.crud_demo.entities.core.user import UserRepository
from src.crud_demo.runtime.context import get_config, with_context
from src.crud_demo.runtime.log_config import configure_logging

from .utils import build_override, console, users_table

DATABASE_URL_OPTION = typer.Option(
    None,
    "--database-url",
    "-d",
    help="SQLAlchemy URL overriding the configured database",
)
LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    case_sensitive=False,
    help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
)


def run(
    database_url: str | None = DATABASE_URL_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    abort_on_connection_failure: bool = typer.Option(
        False,
        "--abort-on-connection-failure",
        help="Stop when the connection check fails instead of continuing",
    ),
) -> None:
    """
    ▶️  Run the full demo: reset the Users table, insert, query, update and delete.

    WARNING: the Users table is dropped and recreated on every run.
    """
    with with_context(build_override(database_url)):
        configure_logging(log_level)
        config = get_config()
        if abort_on_connection_failure:
            config = config.model_copy(
                update={"demo": config.demo.model_copy(update={"abort_on_connection_failure": True})}
            )

        console.print(Panel.fit("[bold green]Running ORM CRUD demo[/bold green]", border_style="green"))
        try:
            report = run_demo(config)
        except DemoError as e:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(code=1) from e
        except Exception as e:
            console.print(f"[red]❌ Demo failed: {type(e).__name__}: {e}[/red]")
            raise typer.Exit(code=1) from e

    console.print(users_table(report.all_users, title="All users"))
    console.print(f"[blue]Names:[/blue] {', '.join(row['name'] for row in report.names)}")
    console.print(f"[blue]Age > 20:[/blue] {', '.join(report.filtered_names)}")
    console.print(f"[blue]Updated rows:[/blue] {report.updated_count}")
    console.print(f"[blue]Deleted rows:[/blue] {report.deleted_count}")
    console.print(users_table(report.remaining, title="Remaining users"))


def check(
    database_url: str | None = DATABASE_URL_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """🩺 Verify that the configured database accepts connections."""
    with with_context(build_override(database_url)):
        configure_logging(log_level)
        try:
            with connect(get_config().database) as db:
                healthy = db.health_check()
        except Exception as e:
            console.print(f"[red]❌ Unable to connect with database: {e}[/red]")
            raise typer.Exit(code=1) from e

    if not healthy:
        console.print("[red]❌ Unable to connect with database[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✅ Connection established[/green]")


def reset(
    database_url: str | None = DATABASE_URL_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """🧨 Drop and recreate the Users table. All rows are lost."""
    if not force and not Confirm.ask("Drop and recreate the Users table?"):
        console.print("[yellow]Reset cancelled[/yellow]")
        return

    with with_context(build_override(database_url)):
        configure_logging(log_level)
        try:
            with connect(get_config().database) as db:
                DbManageService(db.engine).reset_fixture()
        except Exception as e:
            console.print(f"[red]❌ Failed to reset tables: {e}[/red]")
            raise typer.Exit(code=1) from e

    console.print("[green]✅ Users table recreated[/green]")


def list_users(
    database_url: str | None = DATABASE_URL_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
) -> None:
    """📋 List the users currently stored."""
    with with_context(build_override(database_url)):
        configure_logging(log_level)
        try:
            with connect(get_config().database) as db:
                users = []
                if DbManageService(db.engine).tables_exist():
                    with db.session_scope() as session:
                        users = UserRepository(session).find_all()
        except Exception as e:
            console.print(f"[red]❌ Failed to list users: {e}[/red]")
            raise typer.Exit(code=1) from e

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return
    console.print(users_table(users))
    console.print(f"\n[green]Found {len(users)} users[/green]")
