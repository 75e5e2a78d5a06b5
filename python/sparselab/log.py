"""Logging setup for applications that use sparselab.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, on demand.
"""
import logging
from typing import Optional

from ._runtime import get_log_level


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> None:
    """
    Set up logging with a console handler and optionally a file handler.

    Args:
        level: Logging level (e.g., logging.INFO). Defaults to the level named by
            ``SPARSELAB_LOG_LEVEL``, or WARNING.
        log_file: Optional path to a file for logging output.
    """
    if level is None:
        level = get_log_level()
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        logger.addHandler(fh)


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return the logger called ``name``, optionally forcing its level."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
