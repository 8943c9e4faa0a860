"""Logging utilities.

All package loggers live under the ``annostats`` namespace.  The library never
installs handlers on import; :func:`configure_logging` is called by the CLI (or
by an embedding application) and is idempotent: repeated calls reuse the one
package handler, point it at the current ``sys.stderr`` and adjust the level.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "annostats"
_FORMAT = "%(levelname)s %(name)s: %(message)s"
_HANDLER_ATTR = "_annostats_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace for module ``name``."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger and set ``level``."""

    if isinstance(level, str):
        level = level.upper()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handler = next((h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)
    elif isinstance(handler, logging.StreamHandler):
        handler.stream = sys.stderr
    root.setLevel(level)
    return root


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging"]
