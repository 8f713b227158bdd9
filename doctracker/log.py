"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "doctracker"


def setup_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """Route ``doctracker`` logs through a rich handler.

    Calling this more than once replaces the previous handler.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...). Unknown names fall
            back to WARNING.
        console: Console to log to. Defaults to stderr.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logger.setLevel(numeric_level)
    return logger
