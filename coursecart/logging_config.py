from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from coursecart import config

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str | None = None) -> None:
    """
    Console logging on stderr, level from COURSECART_LOG_LEVEL (default WARNING).
    Unknown level names fall back to WARNING.
    """
    level = (level or config.log_level()).upper()
    if level not in LOG_LEVELS:
        level = "WARNING"

    root = logging.getLogger()
    root.setLevel(level)

    # Prevent duplicate handlers
    if root.handlers:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="%(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
