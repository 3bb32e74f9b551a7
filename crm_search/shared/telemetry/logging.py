"""Logging configuration for the service."""

import logging
import sys

from crm_search.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty third-party loggers kept at WARNING unless debugging.
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "opentelemetry")


def setup_logging() -> None:
    """Configure process-wide logging to stdout.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
