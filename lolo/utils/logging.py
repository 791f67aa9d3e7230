"""Logging setup shared by the CLI and the FastAPI host."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Server loggers that install their own handlers; routed through ours instead
_HOST_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Send every engine and host log line to *stream* (stdout by default).

    Unknown level names fall back to INFO. Returns the installed handler.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _HOST_LOGGERS:
        host_logger = logging.getLogger(name)
        host_logger.handlers.clear()
        host_logger.propagate = True

    return handler
