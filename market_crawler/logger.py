"""
Logging configuration for the marketplace crawler.
"""

import logging
import os
import sys

from .errors import ConfigError

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

# Create logger
logger = logging.getLogger('market_crawler')

if not logger.handlers:
    # Console handler with formatting
    console = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console.setFormatter(formatter)

    logger.addHandler(console)

logger.propagate = False


def configure_logging(level: str = None) -> int:
    """
    Set the package log level (handler included).

    Args:
        level: Level name, case-insensitive; None or empty means INFO

    Returns:
        The numeric level applied

    Raises:
        ConfigError: on an unknown level name
    """
    name = (level or 'INFO').strip().upper()
    if name == 'WARN':
        name = 'WARNING'
    if name not in LEVELS:
        raise ConfigError(f"Unknown LOG_LEVEL={level!r} (choose from: {', '.join(LEVELS)})")

    numeric = getattr(logging, name)
    logger.setLevel(numeric)
    for handler in logger.handlers:
        handler.setLevel(numeric)
    return numeric


# Import-time default; an invalid value waits for load_settings to report it
_env_level = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
configure_logging(_env_level if _env_level in LEVELS else 'INFO')


def get_logger(name: str = None) -> logging.Logger:
    """Get a child logger for a module (e.g. 'stages.discovery')."""
    if name:
        return logger.getChild(name)
    return logger
