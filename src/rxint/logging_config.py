"""Logging setup for the CLI and embedding applications."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from rxint.config import settings


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """Configure the root logger with a rich console handler.

    Args:
        level: Logging level name. Defaults to ``settings.log_level``.
        console: Console to log to. Defaults to stderr.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    # Pillow is chatty at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)
