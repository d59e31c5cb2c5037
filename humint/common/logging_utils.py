"""
Logging utilities for consistent logging setup across the package.

Key material never goes into log records; use :func:`fingerprint` when a
public key needs to be identified in a message.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FINGERPRINT_CHARS = 12


def setup_logger(logger: logging.Logger, log_level: int) -> None:
    """
    Set up a logger with a StreamHandler and standard formatter.

    No handler is added when the application (or an ancestor logger) already
    has one, and calling it again only adjusts the level.

    Args:
        logger: The logger instance to configure
        log_level: The logging level to set
    """
    logger.setLevel(log_level)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)


def fingerprint(public_key: bytes) -> str:
    """Short hex prefix of a public key, safe to log."""
    return public_key.hex()[:FINGERPRINT_CHARS]
