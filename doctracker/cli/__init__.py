"""CLI commands for DocTracker.

This package provides the command-line interface for DocTracker,
including entry logging, statistics and export commands.
"""

from doctracker.cli.main import cli, main

__all__ = ["cli", "main"]
