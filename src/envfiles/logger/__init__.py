"""
Loggers for envfiles.

``get_logger("envfiles")`` returns the library's diagnostics logger. It is
built once per name from {PREFIX}_LOG_LEVEL / _LOG_FILE / _LOG_JSON and then
reused; ``create_logger`` rebuilds it with explicit settings, and every later
``get_logger`` call sees that configuration.

``BuildConsoleLogger`` is the per-build console users read.
"""

import logging
import os
from typing import Dict, Optional

from .console_logger import CONSOLE_PREFIX, BuildConsoleLogger
from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter, release_handlers

_loggers: Dict[str, Logger] = {}


def _get_env_prefix(name: str) -> str:
    """"envfiles" -> "ENVFILES", "envfiles-build" -> "ENVFILES_BUILD"."""
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "envfiles",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """(Re)build the diagnostics logger for name.

    Arguments left as None are read from the environment. The result
    replaces whatever get_logger(name) returned before.
    """
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_str, logging.INFO)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    logger = StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
    )
    _loggers[name] = logger
    return logger


def get_logger(name: str = "envfiles") -> Logger:
    """Return the configured logger for name, creating it on first use."""
    logger = _loggers.get(name)
    if logger is None:
        logger = create_logger(name=name)
    return logger


def reset_loggers() -> None:
    """Close and forget every cached logger. Used by tests."""
    for name in list(_loggers):
        release_handlers(logging.getLogger(name))
    _loggers.clear()


__all__ = [
    "Logger",
    "StructuredLogger",
    "BuildConsoleLogger",
    "CONSOLE_PREFIX",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
    "reset_loggers",
]
