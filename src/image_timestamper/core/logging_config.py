"""Centralized logging configuration for the image timestamper."""

import os
import sys
import logging
from typing import Optional


def setup_logger(
    name: str = "image-timestamper",
    level: Optional[str] = None,
    format_type: str = "simple",
) -> logging.Logger:
    """
    Setup centralized logging with environment variable configuration.

    Args:
        name: Logger name (defaults to "image-timestamper")
        level: Log level override (defaults to env var or INFO)
        format_type: Logging format ("structured" or "simple")

    Returns:
        Configured logger instance

    Environment Variables:
        LOG_LEVEL: Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_FORMAT: Set format type ("structured" or "simple")
    """
    logger = logging.getLogger(name)

    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        env_level = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, env_level, logging.INFO)

    # An explicit level always wins; otherwise keep whatever level an earlier
    # call (or --debug) already set.
    if level or not logger.handlers:
        logger.setLevel(log_level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)

        env_format = os.getenv("LOG_FORMAT", format_type).lower()

        if env_format == "structured":
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)-8s | "
                "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = "image-timestamper") -> logging.Logger:
    """
    Get a logger instance with consistent configuration.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return setup_logger(name)


def get_child_logger(suffix: str, name: str = "image-timestamper") -> logging.Logger:
    """
    Get a logger below the configured ``name`` logger.

    The child has no handler of its own; records propagate to the parent's
    stdout handler and follow its level and format.
    """
    return get_logger(name).getChild(suffix)


def set_debug_logging(name: str = "image-timestamper") -> None:
    """Switch the named logger, and every child logger below it, to DEBUG."""
    get_logger(name).setLevel(logging.DEBUG)


logger = setup_logger()
