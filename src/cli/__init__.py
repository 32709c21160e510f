"""Main CLI application module."""

import typer

from .demo_commands import check, list_users, reset, run

# Create the main CLI application
app = typer.Typer(
    help="🛠️  ORM CRUD demo - create, read, update and delete users through SQLModel",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="run")(run)
app.command(name="check")(check)
app.command(name="reset")(reset)
app.command(name="users")(list_users)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
