"""Centralized logging configuration for the ``support_bank`` package.

- ``configure_logging(...)``: attach a single handler (stderr or a log file)
  to the package root logger. Called by the CLI at startup.
- ``get_logger(name)``: acquire a module logger, making sure the package
  logger has a ``NullHandler`` until the application configures it.

Library modules never attach their own handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "support_bank"
LOG_LEVEL_ENV = "SUPPORTBANK_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _parse_level(level: int | str | None, default: int = logging.WARNING) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level '{level}'")
    return default


def resolve_level(cli_level: str | None, config_level: str | None) -> int:
    """Pick the effective level: CLI flag, then environment, then config."""
    if cli_level:
        return _parse_level(cli_level)
    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val:
        return _parse_level(env_val)
    return _parse_level(config_level)


def configure_logging(
    level: int | str | None = None,
    *,
    log_file: str | None = None,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Install the package handler, replacing one installed by an earlier call.

    Parameters
    ----------
    level:
        ``int`` or level name. ``None`` means ``WARNING``.
    log_file:
        Write log records to this file (appending) instead of a stream.
    fmt:
        Optional format string, defaults to ``DEFAULT_FORMAT``.
    stream:
        Stream for the ``StreamHandler``; ``sys.stderr`` when omitted.
    """
    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h is _handler:
            logger.removeHandler(h)
    if _handler is not None:
        _handler.close()

    numeric = _parse_level(level)
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    _handler = handler
    return logger


def reset_logging() -> None:
    """Detach the configured handler and restore library defaults."""
    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()
        _handler = None
    logger.setLevel(logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
