"""Logging configuration for the application.

Call `configure_logging` once at startup, then create module loggers
with `get_logger(__name__)`.
"""

import logging
import sys
from functools import lru_cache


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Sets up the root logger to write to stdout and applies ``level`` to
    the ``character_api`` package loggers.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing configuration
    )

    logging.getLogger("character_api").setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name.

    Args:
        name: The module name, typically __name__

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
