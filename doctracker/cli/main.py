"""Main CLI entry point for DocTracker.

This module provides the main click group and lazy loading
of command modules.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from doctracker.config import load_config
from doctracker.log import setup_logging

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when the command is invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Entries
    "log": "doctracker.cli.entries",
    "entries": "doctracker.cli.entries",
    "show": "doctracker.cli.entries",
    "edit": "doctracker.cli.entries",
    "delete": "doctracker.cli.entries",
    "export": "doctracker.cli.entries",
    # Statistics
    "stats": "doctracker.cli.stats",
    "compare": "doctracker.cli.stats",
    "top": "doctracker.cli.stats",
    "dashboard": "doctracker.cli.stats",
    # Settings
    "config": "doctracker.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="doctracker")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/doctracker/config.toml).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """DocTracker - document processing time tracker.

    Log daily productivity entries and review totals, breakdowns
    and trends over the last 24 hours, week or month.

    \b
    Quick Start:
      doctracker config --init            # Create a config file
      doctracker log -l "platform=Portal,doctype=Invoice,count=40,time=90"
      doctracker stats --range 1w         # Weekly statistics
    """
    ctx.ensure_object(dict)
    config = load_config(config_path)
    setup_logging("DEBUG" if verbose else config["logging"]["level"])
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
