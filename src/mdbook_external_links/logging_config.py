"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str, console: Console | None = None) -> None:
    """Route log records to stderr; stdout carries the processed book."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    # Parser internals are noisy at DEBUG
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
