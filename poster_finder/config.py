#!/usr/bin/env python3
"""Shared configuration and constants for Poster Finder."""
from __future__ import annotations

import logging
import os
import sys

from .exceptions import ConfigurationError

# ============================================================================
# Environment
# ============================================================================

API_KEY_ENV = "OMDBAPIKEY"

# ============================================================================
# OMDb API
# ============================================================================

OMDB_BASE_URL = "https://www.omdbapi.com/"

# OMDb reports a missing poster with this literal instead of omitting the field
POSTER_NOT_AVAILABLE = "N/A"

# Seconds to wait on connect/read for every HTTP request
REQUEST_TIMEOUT = 30.0

USER_AGENT = "poster-finder/0.1"

# ============================================================================
# Files
# ============================================================================

SOURCE_EXT = ".iso"
THUMBNAIL_EXT = ".jpg"

# Written to the current directory in single-URL mode
DEFAULT_THUMBNAIL_NAME = "thumbnail.jpg"

URL_PREFIXES = ("http://", "https://")

# ============================================================================
# Thumbnails
# ============================================================================

THUMBNAIL_SIZE = (600, 600)

# Posters larger than this are refused before decoding
MAX_DOWNLOAD_BYTES = 20 * 1024 * 1024

PAD_COLOR = (0, 0, 0)
JPEG_QUALITY = 90

# ============================================================================
# Logging Setup
# ============================================================================

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_configured_loggers: set[str] = set()


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with consistent configuration.

    Informational records go to stdout, errors to stderr.

    Args:
        name: Logger name (e.g., "poster-finder").

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure once per logger name
    if name not in _configured_loggers:
        logger.setLevel(logging.INFO)
        logger.handlers.clear()

        formatter = logging.Formatter(_LOG_FORMAT)

        out_handler = logging.StreamHandler(sys.stdout)
        out_handler.setFormatter(formatter)
        out_handler.addFilter(_BelowErrorFilter())
        logger.addHandler(out_handler)

        err_handler = logging.StreamHandler(sys.stderr)
        err_handler.setFormatter(formatter)
        err_handler.setLevel(logging.ERROR)
        logger.addHandler(err_handler)

        # Prevent propagation to root logger
        logger.propagate = False
        _configured_loggers.add(name)

        # Silence chatty libraries
        logging.getLogger("PIL").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger


def get_api_key() -> str:
    """Read the OMDb API key from the environment.

    Returns:
        The API key.

    Raises:
        ConfigurationError: If the variable is unset or empty.
    """
    api_key = os.environ.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
    return api_key
