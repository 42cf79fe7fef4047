"""Structured logging with correlation IDs.

This module configures structlog for JSON (production) or console
(development) output. Engine failures are logged by passing the raised
``CollectionEngineError`` as ``engine_error``; the ``expand_engine_error``
processor flattens it into ``error_code``/``error`` fields so the tagged
failure stays visible in logs while the API only reports ``success``.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from contentbase.core.config import Settings, get_settings


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    PrintLogger has no ``name`` attribute, so fall back to the package name.
    """
    event_dict["logger"] = getattr(logger, "name", None) or "contentbase"
    return event_dict


def expand_engine_error(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Flatten an ``engine_error`` exception into plain log fields.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Event dictionary with ``error_code`` and ``error`` set.
    """
    error = event_dict.pop("engine_error", None)
    if error is not None:
        event_dict["error_code"] = getattr(error, "code", type(error).__name__)
        event_dict["error"] = str(error)
        diagnostic = getattr(error, "diagnostic", None)
        if diagnostic:
            event_dict["diagnostic"] = diagnostic
    return event_dict


def escape_unencodable_text(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Backslash-escape string fields that are not valid UTF-8 text.

    Caller input such as table names is logged as given and may hold lone
    surrogates, which the output stream cannot encode.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError:
                event_dict[key] = value.encode("utf-8", "backslashreplace").decode("utf-8")
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename structlog's 'event' field to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        expand_engine_error,
        escape_unencodable_text,
        rename_message_field,
    ]

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        cache_loggers = False
    else:
        renderer = structlog.processors.JSONRenderer()
        cache_loggers = True

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )

    # Standard logging for third-party libraries (uvicorn, sqlalchemy)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'contentbase'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "contentbase")


def bind_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current logging context.

    Called by the request middleware with the ``X-Correlation-ID`` header
    value or a freshly generated one.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables from the current logging context."""
    structlog.contextvars.clear_contextvars()
