"""Shared utilities for CLI commands."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from src.crud_demo.entities.core.user import User
from src.crud_demo.runtime.config.config_data import ConfigData, DatabaseConfig

# Initialize Rich console for colored output
console = Console()


def build_override(database_url: str | None) -> ConfigData | None:
    """Config override carrying only what was passed on the command line."""
    if not database_url:
        return None
    return ConfigData(database=DatabaseConfig(url=database_url))


def users_table(users: Sequence[User], title: str = "Users") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Age", style="magenta", justify="right")
    table.add_column("Phone", style="blue", justify="right")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")

    for user in users:
        table.add_row(
            str(user.id),
            user.name,
            "" if user.age is None else str(user.age),
            str(user.phone),
            user.created_at.isoformat(sep=" ", timespec="seconds"),
            user.updated_at.isoformat(sep=" ", timespec="seconds"),
        )
    return table
