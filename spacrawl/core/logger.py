"""Logging setup for the spacrawl CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached once per command run by :func:`configure_logging`, driven by the
``log_level`` and ``log_file`` settings.

- The console (stderr) handler follows ``log_level``, so ``LOG_LEVEL=DEBUG``
  shows per-page extraction detail while a crawl runs.
- A rotating file handler is added only when ``log_file`` is set. It always
  records DEBUG so a failed crawl can be diagnosed after the fact.

Examples:
    >>> from spacrawl.core.config import Settings
    >>> from spacrawl.core.logger import configure_logging
    >>> logger = configure_logging(Settings(log_level="DEBUG"))
    >>> logger.debug("https://app.example.com: 4 top-level nodes, 7 routes")
    2026-10-19 10:00:00,123 | DEBUG | spacrawl | https://app.example.com: ...
"""

import logging
from logging.handlers import RotatingFileHandler

from spacrawl.core.config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

PACKAGE_LOGGER = "spacrawl"

# 10MB per file, 3 backups; one file per crawl run is typically a few KB
MAX_LOG_SIZE_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 3

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    settings: Settings, name: str = PACKAGE_LOGGER
) -> logging.Logger:
    """Attach console and optional file handlers to the package logger.

    Calling this again replaces the handlers installed by a previous call, so
    each CLI invocation starts from a clean configuration.

    Args:
        settings: Source of ``log_level`` and ``log_file``.
        name: Logger to configure. Child loggers inherit its handlers.

    Returns:
        The configured logger.
    """
    console_level = logging.getLevelName(settings.log_level)
    logger = logging.getLogger(name)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=MAX_LOG_SIZE_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(console_level, logging.WARNING))

    return logger
