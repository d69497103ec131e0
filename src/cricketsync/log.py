"""
Console logging for cricketsync commands.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Logging configuration
logger = logging.getLogger("cricketsync")
handler = logging.StreamHandler()
formatter = logging.Formatter(LOG_FORMAT)
handler.setFormatter(formatter)
logger.addHandler(handler)


def set_log_level(level: str) -> None:
    """Apply ``level`` (case-insensitive name) to the package logger."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
