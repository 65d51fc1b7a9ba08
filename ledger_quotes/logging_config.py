from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .infra.settings import SettingsLoader

LOGGER_NAME = "ledger_quotes"


def configure_logging(level: str | None = None) -> None:
    """Configure project-wide logging on stderr and an optional rotating file.

    Uses SettingsLoader for level, file path and rotation settings. stdout is
    left alone since it carries the price lines. Idempotent: subsequent calls
    only adjust the level and won't duplicate handlers.
    """
    settings = SettingsLoader()
    level_name = str(level or settings.get("log_level", "WARNING")).upper()
    lvl = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        # Already configured
        logger.setLevel(lvl)
        for handler in logger.handlers:
            handler.setLevel(lvl)
        return

    fmt = logging.Formatter(
        fmt="%(levelname)s %(asctime)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    logger.setLevel(lvl)
    logger.propagate = False

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(lvl)
    stream.setFormatter(fmt)
    logger.addHandler(stream)

    log_file = settings.get("log_file")
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=int(settings.get("log_rotation_bytes", 1_048_576)),
            backupCount=int(settings.get("log_backup_count", 5)),
            encoding="utf-8",
        )
        handler.setLevel(lvl)
        handler.setFormatter(fmt)
        logger.addHandler(handler)
