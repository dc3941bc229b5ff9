"""
Utility functions for the application
"""

import sys
import logging
import structlog
from structlog import contextvars as struct_context
from .config import settings


def configure_structlog(log_level: str = None, log_format: str = None) -> None:
    """Configure structlog for the whole process."""
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    processors = [
        struct_context.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if log_level == "debug":
        level = logging.DEBUG
    elif log_level == "info":
        level = logging.INFO
    else:  # false: only fatal errors get through
        level = logging.CRITICAL

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


configure_structlog()

_logger = structlog.get_logger()


def bind_request_context(**kwargs) -> None:
    """Bind structured log context for the current request, ignoring empty values."""
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    if filtered:
        struct_context.bind_contextvars(**filtered)


def reset_request_context(*keys: str) -> None:
    """Drop the given context keys, or everything when none are passed."""
    if keys:
        struct_context.unbind_contextvars(*keys)
    else:
        struct_context.clear_contextvars()


def error_log(message: str, **kwargs) -> None:
    """
    Log at error level.

    Args:
        message: log message
        **kwargs: extra structured fields
    """
    _logger.error(message, **kwargs)


def warning_log(message: str, **kwargs) -> None:
    _logger.warning(message, **kwargs)


def info_log(message: str, **kwargs) -> None:
    _logger.info(message, **kwargs)


def debug_log(message: str, **kwargs) -> None:
    _logger.debug(message, **kwargs)


def request_stage_log(stage: str, message: str, **kwargs) -> None:
    """
    Log info-level request stage transitions without dumping payload data.

    Args:
        stage: Logical stage identifier (e.g. "received", "upstream_request").
        message: Human readable description for terminal viewers.
        **kwargs: Extra structured fields to enrich the log.
    """
    normalized_stage = (stage or "unknown").strip().lower().replace(" ", "_")
    info_log(f"[REQUEST] {message}", stage=normalized_stage, **kwargs)

