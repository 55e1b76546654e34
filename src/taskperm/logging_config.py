"""Logging setup for the taskperm command line."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """
    Route taskperm's module loggers to stderr or a file.

    Unknown level names fall back to WARNING. Parent directories of
    log_file are created as needed.
    """
    handler: logging.Handler
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8", delay=True)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[handler],
    )
