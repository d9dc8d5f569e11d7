"""Structlog-based logging configuration for questvault.

This module provides structured logging configuration using structlog on top
of the standard logging handlers:
- Console output, human-readable by default
- Optional JSON rendering for machine consumption
- Optional log file in the data folder's logs directory
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from questvault.config.models import LoggingConfig


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json_output(config: LoggingConfig) -> bool:
    """Decide between JSON and console rendering.

    An explicit setting wins; otherwise the QUESTVAULT_JSON_LOGS environment
    variable is consulted, defaulting to human-readable output.
    """
    if config.json_logs is not None:
        return config.json_logs
    return os.environ.get("QUESTVAULT_JSON_LOGS", "false").lower() == "true"


def _configure_processors(config: LoggingConfig) -> list:
    """Configure structlog processors from the logging config."""
    extra_fields = {
        "service": "questvault",
        **config.extra_fields,  # Allow config to override/add fields
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _use_json_output(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return processors


def _configure_handlers(config: LoggingConfig, log_file: Path | None) -> None:
    """Configure stdlib logging handlers for console and optional file output."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.level.upper(), logging.INFO)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=config.max_file_bytes, backupCount=config.backup_count
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(file_handler)


def configure_structlog(config: LoggingConfig, log_file: Path | None = None) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The logging settings.
        log_file: Optional path of a log file to write alongside the console.
    """
    processors = _configure_processors(config)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config, log_file)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        log_level=config.level,
        json_output=_use_json_output(config),
        log_file=str(log_file) if log_file else None,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
