from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(verbosity: str = "warning", verbose: bool = False) -> None:
    """Route log records to stderr through rich."""
    level = logging.DEBUG if verbose else _LEVELS.get(verbosity, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=False)],
        force=True,
    )
