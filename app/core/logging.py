"""Logging configuration using loguru."""

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

    from app.core.config import Settings


def setup_logging(settings: "Settings") -> None:
    """
    Configure the loguru logger from application settings.

    Args:
        settings: Application settings (log level and serialization flag)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | {extra}"
        ),
        serialize=settings.log_serialize,
        enqueue=True,
    )

    logger.info("Logging configured", level=settings.log_level, serialize=settings.log_serialize)


def get_logger(name: str) -> "Logger":
    """
    Get a logger instance bound to a module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)
