"""Entry commands for DocTracker CLI.

Handles logging, listing, editing, deleting and exporting entries.
"""

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from doctracker.cli.common import (
    console,
    fail,
    get_data_store,
    get_user,
    parse_day,
)
from doctracker.errors import DocTrackerError
from doctracker.models import DayType, EntryRecord

LINE_KEYS = {
    "platform": "platform",
    "doctype": "docType",
    "doc_type": "docType",
    "queue": "queue",
    "count": "count",
    "time": "timeInMins",
    "mins": "timeInMins",
    "time_in_mins": "timeInMins",
}

BREAK_KEYS = {
    "activity": "activityType",
    "activity_type": "activityType",
    "duration": "duration",
    "comments": "comments",
}

DAY_TYPES = [day_type.value for day_type in DayType]


def _parse_spec(spec: str, keys: dict[str, str]) -> dict[str, str]:
    """Parse ``key=value,key=value`` into an alias-keyed dict."""
    parsed = {}
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            raise click.BadParameter(f"Expected key=value, got '{part}'")
        key, value = part.split("=", 1)
        field = keys.get(key.strip().lower())
        if field is None:
            raise click.BadParameter(
                f"Unknown key '{key.strip()}'. Use one of: {', '.join(sorted(keys))}"
            )
        parsed[field] = value.strip()
    return parsed


def parse_line_spec(spec: str) -> dict[str, str]:
    """Parse a productive line, e.g. ``platform=Portal,doctype=Invoice,count=40,time=90``."""
    return _parse_spec(spec, LINE_KEYS)


def parse_break_spec(spec: str) -> dict[str, str]:
    """Parse a non-productive line, e.g. ``activity=Meeting,duration=30``."""
    return _parse_spec(spec, BREAK_KEYS)


def _entry_totals(entry: EntryRecord) -> tuple[int, int]:
    documents = sum(line.count or 0 for line in entry.productive_lines)
    minutes = sum(line.time_in_mins or 0 for line in entry.productive_lines)
    return documents, minutes


def _get_service(ctx: click.Context):
    from doctracker.entries import EntryService

    return EntryService(get_data_store(ctx))


@click.command("log")
@click.option(
    "--date", "date_str",
    default=None,
    help="Day the entry represents (default: today, UTC).",
)
@click.option(
    "--day-type",
    type=click.Choice(DAY_TYPES),
    default=DayType.FULL_DAY.value,
    show_default=True,
    help="Kind of working day.",
)
@click.option(
    "--line", "-l", "lines",
    multiple=True,
    help="Productive line: platform=..,doctype=..,queue=..,count=..,time=..",
)
@click.option(
    "--break", "-b", "breaks",
    multiple=True,
    help="Non-productive line: activity=..,duration=..,comments=..",
)
@click.option(
    "--as", "display_name",
    default=None,
    help="Record the entry under another name (admins only).",
)
@click.pass_context
def log_entry(
    ctx: click.Context,
    date_str: Optional[str],
    day_type: str,
    lines: tuple[str, ...],
    breaks: tuple[str, ...],
    display_name: Optional[str],
) -> None:
    """Log a day's productivity entry.

    \b
    Examples:
      doctracker log -l "platform=Portal,doctype=Invoice,count=40,time=90"
      doctracker log --date 2024-05-02 --day-type "Half Day" \\
          -l "platform=Mail,queue=Claims,count=12,time=45" \\
          -b "activity=Training,duration=60"
    """
    user = get_user(ctx)
    if display_name and not user.is_admin:
        console.print("[yellow]--as is only honoured for admins; using your own name[/yellow]")

    if date_str:
        entry_date = parse_day(date_str)
    else:
        now = datetime.now(timezone.utc)
        entry_date = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)

    rows = [parse_line_spec(spec) for spec in lines]
    non_productive_rows = [parse_break_spec(spec) for spec in breaks]

    try:
        entry = _get_service(ctx).create_entry(
            user,
            date=entry_date,
            day_type=day_type,
            rows=rows,
            non_productive_rows=non_productive_rows,
            display_name=display_name,
        )
    except DocTrackerError as e:
        fail(e)

    documents, minutes = _entry_totals(entry)
    console.print(
        f"[green]✓ Entry saved successfully[/green] "
        f"[dim](#{entry.id}, {entry.day_key}, {documents} docs, {minutes} mins)[/dim]"
    )


@click.command("entries")
@click.option("--limit", "-n", type=int, default=10, show_default=True, help="Entries to show.")
@click.option("--skip", type=int, default=0, help="Entries to skip.")
@click.option("--from", "from_str", default=None, help="Earliest date (inclusive).")
@click.option("--to", "to_str", default=None, help="Latest date (inclusive).")
@click.pass_context
def list_entries(
    ctx: click.Context,
    limit: int,
    skip: int,
    from_str: Optional[str],
    to_str: Optional[str],
) -> None:
    """List your entries, newest first."""
    user = get_user(ctx)
    start = parse_day(from_str) if from_str else None
    end = parse_day(to_str) if to_str else None

    entries = _get_service(ctx).get_user_entries(
        user.id, start=start, end=end, limit=limit, skip=skip
    )

    if not entries:
        console.print(Panel(
            "[dim]No entries found[/dim]",
            title="[bold]Entries[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Entries", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Date", style="bold")
    table.add_column("Day Type")
    table.add_column("Name")
    table.add_column("Docs", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Lines", justify="right")

    for entry in entries:
        documents, minutes = _entry_totals(entry)
        table.add_row(
            str(entry.id),
            entry.day_key,
            entry.day_type.value,
            entry.display_name,
            str(documents),
            str(minutes),
            str(len(entry.productive_lines)),
        )

    console.print(table)


@click.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx: click.Context, entry_id: int) -> None:
    """Show one entry with all of its lines."""
    try:
        entry = _get_service(ctx).get_entry(entry_id, get_user(ctx))
    except DocTrackerError as e:
        fail(e)

    documents, minutes = _entry_totals(entry)
    console.print(Panel(
        f"[bold]{entry.display_name}[/bold] · {entry.day_key} · {entry.day_type.value}\n"
        f"Documents: [cyan]{documents}[/cyan]   Minutes: [cyan]{minutes}[/cyan]",
        title=f"[bold]Entry #{entry.id}[/bold]",
        border_style="cyan",
    ))

    if entry.productive_lines:
        table = Table(title="Productive", show_header=True, header_style="bold cyan")
        for column in ("Platform", "Doc Type", "Queue"):
            table.add_column(column)
        table.add_column("Count", justify="right")
        table.add_column("Minutes", justify="right")
        for line in entry.productive_lines:
            table.add_row(
                line.platform or "-",
                line.doc_type or "-",
                line.queue or "-",
                str(line.count if line.count is not None else "-"),
                str(line.time_in_mins if line.time_in_mins is not None else "-"),
            )
        console.print(table)

    if entry.non_productive_lines:
        table = Table(title="Non-productive", show_header=True, header_style="bold magenta")
        table.add_column("Activity")
        table.add_column("Duration", justify="right")
        table.add_column("Comments", max_width=40)
        for line in entry.non_productive_lines:
            table.add_row(
                line.activity_type or "-",
                f"{line.duration:g}" if line.duration is not None else "-",
                line.comments or "-",
            )
        console.print(table)


@click.command("edit")
@click.argument("entry_id", type=int)
@click.option("--day-type", type=click.Choice(DAY_TYPES), default=None, help="New day type.")
@click.option("--line", "-l", "lines", multiple=True, help="Replacement productive lines.")
@click.option("--break", "-b", "breaks", multiple=True, help="Replacement non-productive lines.")
@click.pass_context
def edit_entry(
    ctx: click.Context,
    entry_id: int,
    day_type: Optional[str],
    lines: tuple[str, ...],
    breaks: tuple[str, ...],
) -> None:
    """Replace the day type or lines of an entry.

    Lines given with --line replace all productive lines; --break replaces
    all non-productive lines. Date and owner cannot be changed.
    """
    rows = [parse_line_spec(spec) for spec in lines] if lines else None
    non_productive_rows = [parse_break_spec(spec) for spec in breaks] if breaks else None

    try:
        entry = _get_service(ctx).update_entry(
            entry_id,
            get_user(ctx),
            day_type=day_type,
            rows=rows,
            non_productive_rows=non_productive_rows,
        )
    except DocTrackerError as e:
        fail(e)

    console.print(f"[green]✓ Entry #{entry.id} updated successfully[/green]")


@click.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def delete_entry(ctx: click.Context, entry_id: int, yes: bool) -> None:
    """Delete an entry."""
    if not yes and not click.confirm(f"Delete entry #{entry_id}?"):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        _get_service(ctx).delete_entry(entry_id, get_user(ctx))
    except DocTrackerError as e:
        fail(e)

    console.print(f"[green]✓ Entry #{entry_id} deleted successfully[/green]")


@click.command("export")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("DailyTrackerData.csv"),
    show_default=True,
    help="CSV file to write.",
)
@click.pass_context
def export_entries(ctx: click.Context, output: Path) -> None:
    """Export entries to CSV, one row per productive line.

    Admins export every user's entries.
    """
    from doctracker.entries import EXPORT_COLUMNS

    rows = _get_service(ctx).export_rows(get_user(ctx))
    with open(output, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)

    console.print(f"[green]✓ Exported {len(rows)} rows to {output}[/green]")
