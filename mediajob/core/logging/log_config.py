"""Centralized logging configuration.

Sets the root level from Settings and quiets SQLAlchemy so catalog
queries don't drown out pipeline messages.

Usage:
    from mediajob.core.logging.log_config import setup_logging
    setup_logging()   # Call once at startup
"""

import logging
import sys
from typing import Optional

from mediajob.core.config.settings import settings

# Loggers that stay at WARNING unless the root level is DEBUG
_NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
]


def setup_logging(level: Optional[str] = None) -> None:
    """Configure Python logging for the mediajob process."""
    root_level = _parse_level(level or settings.LOG_LEVEL)

    root = logging.getLogger()
    root.setLevel(root_level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s")
        )
        root.addHandler(handler)

    noisy_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).debug(
        f"Logging configured: root={logging.getLevelName(root_level)}"
    )


def _parse_level(raw: str) -> int:
    """Convert a level name like 'DEBUG' to its numeric value, defaulting to INFO."""
    level = logging.getLevelName(str(raw).upper())
    return level if isinstance(level, int) else logging.INFO
