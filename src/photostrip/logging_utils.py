"""
Logging setup for the photostrip compositor.

Every module reports through the shared ``photostrip`` logger: run stages
and failures from the session, discarded superseded results, and saved
output paths from the export surface. The logger writes to its own
handler and does not propagate, so an embedding app's root logging
configuration does not duplicate these records.
"""

import logging

PACKAGE_LOGGER_NAME = "photostrip"


def setup_logger(
        name: str = PACKAGE_LOGGER_NAME,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Configure a photostrip logger with optional formatting and handler.

    A handler is attached only the first time a name is configured, so
    repeated calls return the same logger without duplicating output.
    Later calls still update the level.

    Args:
        name: Logger name; defaults to the package logger.
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        formatter: Optional custom formatter for the first handler.
        handler: Optional custom handler, e.g. one that forwards run
            events to a UI status line.

    Returns:
        The configured logger.

    """
    logger_instance = logging.getLogger(name)
    logger_instance.setLevel(level)
    if not logger_instance.handlers:
        if formatter is None:
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        if handler is None:
            handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger_instance.addHandler(handler)
        logger_instance.propagate = False
    return logger_instance


# Shared logger used across modules
logger = setup_logger()
