"""Logging utilities.

Library modules obtain loggers through :func:`get_logger` and only emit debug
records.  Handlers are attached by :func:`configure_logging`, which the CLI
calls on every invocation; each call replaces the package's stderr handler,
binding it to the current ``sys.stderr``, so handlers never stack.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "filebuf"
HANDLER_NAME = "filebuf-stderr"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger placed under the ``filebuf`` namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> logging.Logger:
    """Detach the package's stderr handler and restore the default level."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    return logger


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger and set its level."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved
    logger = reset_logging()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging", "reset_logging"]
