"""Statistics commands for DocTracker CLI.

Handles productivity stats, range comparison, top metrics and the dashboard.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from doctracker.cli.common import console, fail, get_config, get_data_store, get_user
from doctracker.errors import DocTrackerError
from doctracker.models import AggregationResult, RankedItem
from doctracker.productivity import SUPPORTED_RANGES

RANGE_LABELS = {
    "24h": "Last 24 Hours",
    "1w": "Last Week",
    "1m": "Last Month",
}


def _get_service(ctx: click.Context):
    from doctracker.productivity.service import ProductivityService

    return ProductivityService(get_data_store(ctx))


def _resolve_range(ctx: click.Context, range_token: Optional[str]) -> str:
    return range_token or get_config(ctx)["stats"]["default_range"]


def _print_json(payload) -> None:
    console.print_json(json.dumps(payload, default=str))


def _breakdown_table(title: str, mapping: dict[str, int]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Documents", justify="right")
    total = sum(mapping.values())
    table.add_column("Share", justify="right")
    for name, count in mapping.items():
        share = (count / total * 100) if total > 0 else 0.0
        table.add_row(name, str(count), f"{share:.1f}%")
    if not mapping:
        table.add_row("[dim]No data[/dim]", "-", "-")
    return table


def _ranked_table(title: str, items: list[RankedItem]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Documents", justify="right")
    for rank, item in enumerate(items, start=1):
        table.add_row(str(rank), item.name, str(item.count))
    if not items:
        table.add_row("-", "[dim]No data available[/dim]", "-")
    return table


def render_stats(stats: AggregationResult) -> None:
    """Print an AggregationResult as panels and tables."""
    summary = stats.summary
    console.print(Panel(
        f"Documents: [bold cyan]{summary.total_documents}[/bold cyan]   "
        f"Time: [bold cyan]{summary.total_time_hours:.2f}h[/bold cyan] "
        f"[dim]({summary.total_time} mins)[/dim]   "
        f"Days active: [bold cyan]{summary.days_active}[/bold cyan]\n"
        f"Avg docs/day: {summary.avg_documents_per_day:.2f}   "
        f"Avg mins/day: {summary.avg_time_per_day:.2f}   "
        f"Avg mins/doc: {summary.avg_time_per_document:.2f}",
        title=f"[bold]{RANGE_LABELS.get(stats.range, stats.range)}[/bold]",
        subtitle=(
            f"{stats.start_date:%Y-%m-%d %H:%M} → {stats.end_date:%Y-%m-%d %H:%M} UTC"
        ),
        border_style="cyan",
    ))

    console.print(_breakdown_table("By Platform", stats.breakdown.by_platform))
    console.print(_breakdown_table("By Document Type", stats.breakdown.by_doc_type))
    console.print(_breakdown_table("By Queue", stats.breakdown.by_queue))

    timeline = Table(title="Timeline", show_header=True, header_style="bold cyan")
    timeline.add_column("Date", style="bold")
    timeline.add_column("Documents", justify="right")
    timeline.add_column("Minutes", justify="right")
    for day in stats.timeline:
        timeline.add_row(day.date, str(day.documents), str(day.time))
    if not stats.timeline:
        timeline.add_row("[dim]No entries[/dim]", "-", "-")
    console.print(timeline)


@click.command("stats")
@click.option("--range", "-r", "range_token", default=None, help="24h, 1w or 1m.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def stats(ctx: click.Context, range_token: Optional[str], as_json: bool) -> None:
    """Show productivity statistics for a time range.

    \b
    Examples:
      doctracker stats              # Default range from config (1w)
      doctracker stats -r 24h       # Last 24 hours
      doctracker stats -r 1m --json # Last month as JSON
    """
    try:
        result = _get_service(ctx).get_productivity_stats(
            get_user(ctx).id, _resolve_range(ctx, range_token)
        )
    except DocTrackerError as e:
        fail(e)

    if as_json:
        _print_json(result.model_dump(mode="json", by_alias=True))
        return
    render_stats(result)


@click.command("compare")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def compare(ctx: click.Context, as_json: bool) -> None:
    """Compare the last 24 hours, week and month side by side."""
    try:
        comparison = _get_service(ctx).get_productivity_comparison(get_user(ctx).id)
    except DocTrackerError as e:
        fail(e)

    if as_json:
        _print_json({
            token: result.model_dump(mode="json", by_alias=True)
            for token, result in comparison.items()
        })
        return

    table = Table(title="Productivity Comparison", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    for token in SUPPORTED_RANGES:
        table.add_column(RANGE_LABELS[token], justify="right")

    rows = [
        ("Documents", "total_documents", "{}"),
        ("Hours", "total_time_hours", "{:.2f}"),
        ("Avg docs/day", "avg_documents_per_day", "{:.2f}"),
        ("Avg mins/day", "avg_time_per_day", "{:.2f}"),
        ("Avg mins/doc", "avg_time_per_document", "{:.2f}"),
        ("Days active", "days_active", "{}"),
    ]
    for label, field, fmt in rows:
        table.add_row(
            label,
            *(fmt.format(getattr(comparison[token].summary, field)) for token in SUPPORTED_RANGES),
        )
    console.print(table)


@click.command("top")
@click.option("--range", "-r", "range_token", default=None, help="24h, 1w or 1m.")
@click.option("--limit", "-n", type=int, default=None, help="Items per list (default 5).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def top(
    ctx: click.Context, range_token: Optional[str], limit: Optional[int], as_json: bool
) -> None:
    """Show top platforms, document types and queues."""
    config = get_config(ctx)
    try:
        metrics = _get_service(ctx).get_top_metrics(
            get_user(ctx).id,
            _resolve_range(ctx, range_token),
            limit=limit if limit is not None else config["stats"]["top_limit"],
        )
    except DocTrackerError as e:
        fail(e)

    if as_json:
        _print_json(metrics.model_dump(mode="json", by_alias=True))
        return

    console.print(_ranked_table("Top Platforms", metrics.top_platforms))
    console.print(_ranked_table("Top Document Types", metrics.top_doc_types))
    console.print(_ranked_table("Top Queues", metrics.top_queues))


@click.command("dashboard")
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """Today's totals and efficiency, plus the 7-day trend.

    Admins see the trend for every user.
    """
    from doctracker.productivity.dashboard import TREND_DAYS, today_snapshot, weekly_trend

    user = get_user(ctx)
    store = get_data_store(ctx)
    now = datetime.now(timezone.utc)
    today = now.date()
    start = datetime(today.year, today.month, today.day, tzinfo=timezone.utc) - timedelta(
        days=TREND_DAYS - 1
    )

    own_entries = store.find_all(owner_id=user.id, start=start, end=now, newest_first=False)
    trend_entries = (
        store.find_all(start=start, end=now, newest_first=False) if user.is_admin else own_entries
    )

    snapshot = today_snapshot(own_entries, today)
    console.print(Panel(
        f"Documents: [bold cyan]{snapshot.documents}[/bold cyan]   "
        f"Hours: [bold cyan]{snapshot.hours:.1f}[/bold cyan]   "
        f"Efficiency: [bold cyan]{snapshot.efficiency:.1f}[/bold cyan] docs/hour",
        title=f"[bold]Today ({snapshot.date})[/bold]",
        border_style="cyan",
    ))
    console.print(_breakdown_table("Platforms (Today)", snapshot.by_platform))
    console.print(_breakdown_table("Document Types (Today)", snapshot.by_doc_type))

    trend = weekly_trend(trend_entries, today)
    table = Table(title="Last 7 Days", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    days = [(today - timedelta(days=offset)) for offset in range(TREND_DAYS - 1, -1, -1)]
    for day in days:
        table.add_column(day.strftime("%a %d"), justify="right")
    for name, series in trend.items():
        table.add_row(name, *(str(count) for count in series.values()))
    if not trend:
        table.add_row("[dim]No entries[/dim]", *("-" for _ in days))
    console.print(table)
