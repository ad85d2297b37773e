"""Centralized logging configuration for matkalk.

The kernel only ever logs at DEBUG through module level loggers; the CLI
calls :func:`setup_logging` once at start-up to decide where those records go.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

BASE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING", log_file: str | None = None, console: bool = True
) -> None:
    """Set up centralized logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file
        console: Whether to log to stderr
    """
    level = os.getenv("MATKALK_LOG_LEVEL", level)
    log_file = os.getenv("MATKALK_LOG_FILE", log_file)

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    formatter = logging.Formatter(BASE_FORMAT, DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1024 * 1024, backupCount=3
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("matkalk_pkg").setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``matkalk_pkg`` namespace.

    Args:
        name: Dotted sub-name, e.g. ``"linalg.elimination"``

    Returns:
        Logger instance
    """
    if name.startswith("matkalk_pkg"):
        return logging.getLogger(name)
    return logging.getLogger(f"matkalk_pkg.{name}")
