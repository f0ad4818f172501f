"""Process-wide logging setup shared by every layer."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from hotel_booking.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    """Configure the root logger once.

    ``force`` re-applies the configuration, which the app factory uses when it
    is handed settings that differ from the environment defaults.
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return

    resolved_level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=resolved_level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=force,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` after making sure logging is configured."""
    configure_logging()
    return logging.getLogger(name)
