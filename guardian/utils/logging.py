"""
Logging utilities for applications using the Guardian SDK.

The SDK logs through loguru at DEBUG level and installs no sinks on import.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    format: Optional[str] = None,
):
    """
    Install console (and optionally file) sinks for the SDK logs.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file
        rotation: Log rotation size/time
        retention: Log retention period
        format: Log format string

    Returns:
        Configured logger instance
    """
    logger.remove()

    if format is None:
        format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

    logger.add(sys.stderr, format=format, level=level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=format,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    return logger


def configure_logging_from_settings(settings):
    """Configure logging with the level from :class:`guardian.config.GuardianSettings`."""
    return configure_logging(level=settings.log_level)
