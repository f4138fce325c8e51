"""
Logging configuration.

Thin wrapper around loguru so modules can do ``logger = get_logger(__name__)``.
"""

import sys
from typing import Any

from loguru import logger

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def init_logging(level: str = "INFO", *, colorize: bool | None = None) -> None:
    """
    Configure loguru sinks.

    Replaces the default handler with a single stderr sink. Records logged
    without ``get_logger`` show ``-`` as their component.

    Args:
        level: Minimum log level name.
        colorize: Force or disable ANSI colors (auto-detected when None).
    """
    logger.configure(extra={"component": "-"})
    logger.remove()
    logger.add(sys.stderr, format=_LOG_FORMAT, level=level.upper(), colorize=colorize)


def get_logger(name: str) -> Any:
    """
    Get a logger bound to a component name.

    Args:
        name: Usually the caller's ``__name__``.

    Returns:
        A loguru logger with ``component`` set in its extra context.
    """
    return logger.bind(component=name)
