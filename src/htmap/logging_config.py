"""Handler setup for the ``htmap`` logger tree, called once by the CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "htmap"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> logging.Logger:
    """
    Route ``htmap.*`` records to stdout and, optionally, to ``log_file``.

    Handlers left over from an earlier call are closed and replaced, so the
    CLI can be invoked repeatedly in one process. The log file is truncated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(Path(log_file), mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging at {logging.getLevelName(level)}, file: {log_file or 'none'}")
    return logger
