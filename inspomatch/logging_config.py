# Path: inspomatch/logging_config.py
# Purpose: Configure application logging.
# Layer: root.
# Details: Component loggers live under the "inspomatch" namespace and share one formatter.

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root inspomatch logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...).
        log_file: Optional file path. When set, stderr only shows warnings.

    Returns:
        Root logger for inspomatch
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger("inspomatch")
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING if log_file else numeric_level)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(numeric_level)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_path}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """Return a logger for a component, e.g. "search.pipeline"."""

    return logging.getLogger(f"inspomatch.{component}")
