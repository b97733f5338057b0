"""Logging configuration and setup."""

import sys
from typing import Optional

from loguru import logger

from prefcache.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: Optional[str] = None, log_to_file: bool = True) -> None:
    """Configures Loguru sinks for the preferences layer.

    The default handler is replaced by a colorized stderr sink. When
    ``log_to_file`` is set, a rotated and compressed log file is also written
    under ``DATA_DIR/logs``; that sink is enqueued so store I/O never waits
    on log writes.

    Args:
        level: Minimum level for both sinks (defaults to ``settings.LOG_LEVEL``).
        log_to_file: Whether to add the rotating file sink.
    """
    level = (level or settings.LOG_LEVEL).upper()
    logger.remove()  # Remove default handler

    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_to_file:
        log_file = settings.DATA_DIR / "logs" / "prefcache.log"
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression="zip",
            level=level,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            format=FILE_FORMAT,
        )

    logger.info(f"Logging initialized at {level}. Data Dir: {settings.DATA_DIR}")
