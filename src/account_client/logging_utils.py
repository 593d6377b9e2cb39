"""
Log setup for worker processes embedding the account client.

`configure_logging` installs one stdout handler on the root logger, using the
level and format from `LoggingSettings`. The `httpx` and `httpcore` loggers
never go below WARNING, since they log every request (with its URL) at INFO
and DEBUG.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import LoggingSettings

QUIET_LOGGERS = ("httpx", "httpcore")
_handler: Optional[logging.Handler] = None


def configure_logging(settings: Optional[LoggingSettings] = None, *, force: bool = False) -> logging.Handler:
    """
    Attach the stdout handler to the root logger and return it.

    Repeated calls reuse the installed handler unless `force` is set, in which
    case it is replaced with one built from the given (or freshly read)
    settings.
    """
    global _handler
    root_logger = logging.getLogger()
    if _handler is not None and not force and _handler in root_logger.handlers:
        return _handler

    settings = settings or LoggingSettings()
    if _handler is not None:
        root_logger.removeHandler(_handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=settings.format, datefmt=settings.datefmt))
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.level_number)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, settings.level_number))

    _handler = handler
    return handler


__all__ = ["configure_logging", "QUIET_LOGGERS"]
