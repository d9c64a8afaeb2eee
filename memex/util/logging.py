"""Stdlib logging setup for MemeX.

Application events go through logfire; this only tunes the log records
emitted by uvicorn and the libraries underneath the API.
"""

import logging
import sys

from memex.config import Settings

# Libraries that log every request, query or connection at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncpg", "dishka", "uvicorn.access")


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route log records to stdout with one line per record.

    Debug mode also echoes SQLAlchemy statements, which is how batch
    SAVEPOINTs show up when tracing a vote locally.

    Args:
        settings: Application settings
    """
    level = _level_for(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
    logging.getLogger("memex").setLevel(level)

    logging.getLogger("memex.logging").info(
        "Logging ready for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
