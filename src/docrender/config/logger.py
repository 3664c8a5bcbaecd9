"""Apply ``LoggerConfig`` to the package logger."""

from __future__ import annotations

import logging

from docrender.config.schema import LoggerConfig, LogLevel

PACKAGE_LOGGER = "docrender"

# Above CRITICAL so nothing from the package is emitted
DISABLED_LEVEL = logging.CRITICAL + 10

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.DISABLED: DISABLED_LEVEL,
}


def configure_logging(config: LoggerConfig | None = None, verbosity: int = 0) -> int:
    """Set the ``docrender`` logger level from ``config`` and return it.

    ``verbosity`` is a ``-v`` count: 1 lowers the level to at most INFO,
    2 or more to DEBUG. Handlers are left to the application.
    """
    level = _LEVELS[(config or LoggerConfig()).level]
    if verbosity == 1:
        level = min(level, logging.INFO)
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    return level
