"""Logging configuration helpers."""
from __future__ import annotations

import logging
import logging.handlers

from machina_loader.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Attach handlers to the ``machina`` logger according to ``config``."""

    log_level = getattr(logging, config.level.upper(), logging.WARNING)
    root = logging.getLogger("machina")
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if config.filepath is not None:
        config.filepath.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=config.filepath,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(_build_formatter())
        root.addHandler(file_handler)

    if config.console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(_build_formatter())
        root.addHandler(console_handler)


def _build_formatter() -> logging.Formatter:
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    return logging.Formatter(fmt=fmt, datefmt=datefmt)
