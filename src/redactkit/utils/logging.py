"""Logging utilities.

All package loggers live below the ``redactkit`` namespace so a single handler
configured by :func:`configure_logging` controls them.  Configuration is
idempotent: calling it repeatedly replaces the level but never stacks
handlers.  Library code only calls :func:`get_logger`; handlers are installed
by the CLI.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER_NAME", "LOG_FORMAT", "get_logger", "configure_logging"]

ROOT_LOGGER_NAME = "redactkit"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "redactkit-stderr"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` inside the package namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str = "WARNING", *, verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Parameters
    ----------
    level:
        Name of the logging level (``DEBUG``, ``INFO`` ...).  Unknown names fall
        back to ``WARNING``.
    verbose:
        Force ``DEBUG`` regardless of ``level``.
    """

    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(log_level)

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler):
        handler.setStream(sys.stderr)
    handler.setLevel(log_level)
    return root
