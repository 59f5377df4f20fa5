#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2tg/logging_utils.py
"""Centralized logging utilities for md2tg entry points.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, or by the embedding application.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from md2tg.exceptions import ValidationError

LIBRARY_LOGGER_NAME = "md2tg"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric logging level.

    Raises
    ------
    ValidationError
        If a level name is not one of the standard logging levels

    """
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).upper())
    if not isinstance(resolved, int):
        raise ValidationError(f"Unknown log level: {log_level}", parameter_name="log_level", parameter_value=log_level)
    return resolved


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure the md2tg logger hierarchy for command-line use.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured ``md2tg`` logger.

    """
    resolved_level = resolve_log_level(log_level)

    logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    logger.setLevel(resolved_level)
    logger.handlers.clear()
    logger.propagate = False

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:  # pragma: no cover - handled at runtime
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger
