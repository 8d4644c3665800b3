"""Logging setup for florida_news."""

import logging
import sys
from typing import Optional

from florida_news.config import ServerConfig


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("florida_news")


def setup_logging(config: Optional[ServerConfig] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Safe to call more than once; the handler is only installed the first time.

    Args:
        config: Optional server configuration (for the log level)

    Returns:
        The package logger
    """
    level = config.log_level if config else "INFO"
    logger.setLevel(level)

    if not any(getattr(h, "_florida_news", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._florida_news = True
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger."""
    if name == "florida_news" or name.startswith("florida_news."):
        return logging.getLogger(name)
    return logger.getChild(name)
