"""Configuration command for DocTracker CLI."""

import click
from rich.panel import Panel
from rich.table import Table

from doctracker.cli.common import console, get_config, get_data_store
from doctracker.config import CONFIG_PATH, get_db_path, write_default_config


@click.command("config")
@click.option("--init", is_flag=True, default=False, help="Write a default config file.")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
@click.pass_context
def config(ctx: click.Context, init: bool, force: bool) -> None:
    """Show the active configuration, or create one with --init."""
    path = ctx.obj.get("config_path") if ctx.obj else None
    path = path or CONFIG_PATH

    if init:
        if path.exists() and not force:
            console.print(f"[yellow]Config already exists at {path} (use --force)[/yellow]")
            return
        written = write_default_config(path)
        console.print(Panel(
            f"[green]Config file created:[/green] [cyan]{written}[/cyan]\n\n"
            "Edit the [bold]\\[user][/bold] section to set your ID, name and admin flag.",
            title="[bold]DocTracker Config[/bold]",
            border_style="green",
        ))
        return

    settings = get_config(ctx)
    table = Table(title=f"Configuration ({path})", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for section, values in settings.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))
    console.print(table)

    if not get_db_path(settings).exists():
        console.print("[dim]No database yet[/dim]")
        return
    counts = get_data_store(ctx).get_stats()
    console.print(f"[dim]Stored entries: {counts.get('entries', 0)}[/dim]")
