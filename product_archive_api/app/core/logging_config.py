"""
Logging configuration for the service.

``setup_logging`` takes the application ``Settings``: ``log_level``
sets the root level unless ``debug`` is on, in which case everything
down to DEBUG is shown, and ``log_file`` adds a file handler next to
the console.  uvicorn's own loggers are stripped of their handlers
and propagate to the root, so access logs and service logs come out
in one format.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_configured = False


def resolve_level(settings: Settings) -> int:
    """Numeric root level; unknown level names fall back to INFO."""
    if settings.debug:
        return logging.DEBUG
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(settings: Settings) -> None:
    """Configure the root logger once per process."""
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(resolve_level(settings))
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    _configured = True
    logging.getLogger(__name__).debug(
        "Logging configured at %s", logging.getLevelName(root.level)
    )
