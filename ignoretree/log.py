"""Logging setup for the ignoretree command line."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def init_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """
    Configure the root logger with a Rich console handler.

    Args:
        level (str): Level name, case-insensitive. Unknown names fall back
            to INFO.
        console (Optional[Console]): Console to log to, stderr by default.
    """
    resolved_level = level.upper()
    unknown = resolved_level not in _LEVELS
    if unknown:
        resolved_level = "INFO"

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
    )
    logging.basicConfig(
        level=getattr(logging, resolved_level),
        format="%(name)s | %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    if unknown:
        logging.getLogger(__name__).warning(
            "Unsupported log level %r, falling back to INFO", level
        )
