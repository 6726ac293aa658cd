"""Logging configuration for the mongotype command line.

Diagnostics go to stderr through the root logger; rendered documents are
written to the output sink and never pass through logging.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["setup_logging"]


def setup_logging(log_level: str = "WARNING", silent: bool = False) -> None:
    """Configure the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        silent:    If True, install no console handler at all.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    if silent:
        root_logger.addHandler(logging.NullHandler())
        return

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(console_handler)
