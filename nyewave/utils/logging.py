"""Logging setup shared by the web app, scheduler and CLI."""
from __future__ import annotations

import logging

from nyewave.utils.wave_events import get_wave_event_handler

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(name: str = "nyewave", level: str | int = "INFO") -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    event_handler = get_wave_event_handler()
    if event_handler not in logger.handlers:
        logger.addHandler(event_handler)
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicate logging from child loggers
    logger.propagate = False
    return logger
