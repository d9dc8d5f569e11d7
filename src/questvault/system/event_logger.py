"""Logging collaborator used by the persistence framework.

Every structural recovery (folder recreated, config regenerated, correction
chain applied, critical field missing) goes through :class:`EventLogger`, so
callers can inject their own logger instead of relying on a global one.
"""

from enum import StrEnum
from typing import Any

import structlog


class LogSeverity(StrEnum):
    """Severity of a log record, valued by the structlog method that emits it."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warning"
    ERROR = "error"
    FATAL = "critical"


class EventLogger:
    """Adapter exposing a ``log(message, detail, severity)`` call over structlog."""

    def __init__(self, logger: Any | None = None, name: str = "questvault"):
        """Initialize EventLogger.

        Args:
            logger: Optional structlog logger (or anything with the same
                method names). If None, ``structlog.get_logger(name)`` is used.
            name: Logger name used when no logger is supplied.
        """
        self._logger = logger if logger is not None else structlog.get_logger(name)

    def log(self, message: str, detail: str = "", severity: LogSeverity = LogSeverity.INFO) -> None:
        """Emit one log record.

        Args:
            message: Short description of what happened
            detail: Optional extra information (file path, versions, ...)
            severity: Record severity
        """
        emit = getattr(self._logger, LogSeverity(severity).value)
        if detail:
            emit(message, detail=detail)
        else:
            emit(message)
