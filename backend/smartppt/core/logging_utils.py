"""Logging helpers for consistent console output."""

import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the service.

    uvicorn installs its own handlers for its loggers; this only makes sure
    application loggers (``smartppt.*``) reach the console at *level*.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=_FORMAT)
    logging.getLogger("smartppt").setLevel(numeric)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
