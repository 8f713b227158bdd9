"""Helpers shared by CLI command modules."""

from datetime import datetime, timezone
from typing import Any, NoReturn

import click
from dateutil import parser as date_parser
from rich.console import Console
from rich.panel import Panel

from doctracker.config import get_db_path, load_config
from doctracker.errors import DocTrackerError
from doctracker.models import UserContext

console = Console()


def get_config(ctx: click.Context) -> dict[str, Any]:
    """Configuration loaded by the root group, or defaults."""
    obj = ctx.find_object(dict)
    if obj and "config" in obj:
        return obj["config"]
    return load_config()


def get_data_store(ctx: click.Context):
    """Get the entry store instance."""
    from doctracker.db.store import EntryStore

    return EntryStore(get_db_path(get_config(ctx)))


def get_user(ctx: click.Context) -> UserContext:
    """The acting user from the [user] config section."""
    user = get_config(ctx)["user"]
    return UserContext(
        id=str(user["id"]),
        name=str(user.get("name") or user["id"]),
        is_admin=bool(user.get("is_admin", False)),
    )


def parse_day(value: str) -> datetime:
    """Parse a user-supplied date as midnight UTC on that calendar day.

    Raises:
        click.BadParameter: If the value is not a recognisable date.
    """
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise click.BadParameter(f"Could not parse date '{value}'") from e
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)


def print_error(error: Exception, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        f"[red]{error}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(error: DocTrackerError) -> NoReturn:
    """Print a DocTracker error and exit with status 1."""
    print_error(error)
    raise SystemExit(1)
