"""stderr logging for the checker.

Only the ``xmlcheck`` logger is configured; the report printed to stdout never
goes through logging.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "xmlcheck"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    """Install a single stream handler; calling again replaces it."""
    global _handler
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
