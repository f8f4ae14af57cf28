"""Structlog-based logging for the family graph engine.

Library modules only call :func:`get_logger`. Importing the package leaves
structlog and the standard logging module untouched; the host application
(or the ``family-graph`` CLI) decides how events are rendered.
"""
from __future__ import annotations

import logging
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: LogLevel = "WARNING") -> None:
    """Render events as JSON lines, dropping those below ``level``.

    Loggers are not cached, so each event goes to the stdout current at the
    time it is emitted.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "family_graph"):
    return structlog.get_logger(name)
