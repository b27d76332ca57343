"""
Logging configuration for the Surf Tracker API.

Console-only: the process is expected to run under a supervisor that
collects stdout.
"""
import logging
import sys

from .config import Settings


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        settings: Application settings (LOG_LEVEL, DEBUG)

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper())

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if settings.DEBUG:
        log_format = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        log_format = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info("Logging initialized (level=%s, environment=%s)", settings.LOG_LEVEL, settings.ENVIRONMENT)
    return logger
