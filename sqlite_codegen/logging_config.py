"""Logging setup shared by every sqlite_codegen module."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sqlite_codegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Attach a rich handler to the package logger.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        console: Console to log to (defaults to stderr).
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

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
    logger.propagate = False
