"""Logging configuration for blogstore.

All module loggers live under the ``blogstore`` namespace and propagate to
a single handler on the namespace logger. The handler writes to stderr so
that report output on stdout (``blogstore lint --format json``) stays
machine-readable.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER_NAME = "blogstore"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    module_name: str = ROOT_LOGGER_NAME,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the namespace handler once and return a module logger.

    Args:
        level: Logging level applied the first time the handler is installed.
        module_name: Dotted name below ``blogstore`` (e.g. "content.store").
        stream: Destination stream for the shared handler (default stderr).

    Returns:
        Logger named ``blogstore.<module_name>``.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root.setLevel(level)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)

    if module_name == ROOT_LOGGER_NAME or module_name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


def set_verbosity(verbose: int = 0, quiet: bool = False) -> int:
    """Adjust the namespace level from CLI flags and return the new level.

    ``-v`` enables DEBUG; ``--quiet`` shows errors only.
    """
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.DEBUG
    else:
        level = logging.INFO
    setup_logging(level=level)
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
    return level
