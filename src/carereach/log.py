"""
Logging configuration for CareReach.

Every entry point (CLI, API) goes through `configure_logging()` once, so model runs
and request handling end up in the same stream and the same file.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "carereach"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_dir: Path, level: str = "INFO") -> logging.Logger:
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "carereach.log"

    # Child loggers (carereach.scoring.*, carereach.api) inherit these handlers.
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    # Keep records out of the root logger so uvicorn/pytest handlers do not print them twice.
    logger.propagate = False

    # Handlers are attached only once; repeated settings loads just adjust the level.
    if not logger.handlers:
        fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        stream = logging.StreamHandler()
        stream.setFormatter(fmt)
        logger.addHandler(stream)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(level.upper())
    return logger
