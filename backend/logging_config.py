"""Centralized logging configuration."""

import logging
from typing import Optional

from config import settings

# Third-party loggers that are too chatty below WARNING
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "urllib3",
)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the API and the collection script.

    Args:
        level: Root level override (e.g. "DEBUG" from a ``--verbose`` flag).
            Defaults to ``settings.LOG_LEVEL``.
    """
    root_level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
        datefmt="%H:%M:%S",
        level=getattr(logging, root_level),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
