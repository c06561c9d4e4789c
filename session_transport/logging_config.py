"""
Logging configuration for Session Transport.

Provides centralized structured logging setup with JSON output for production
and human-readable output for development. Supports correlation IDs so that a
transport call can be traced back to the session operation that issued it.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from structlog.types import EventDict

if TYPE_CHECKING:
    from session_transport.config.settings import LoggingConfig


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add correlation ID to log events if present in context.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary to modify

    Returns:
        Modified event dictionary with correlation_id if available
    """
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set correlation ID for the current context.

    Args:
        correlation_id: Optional correlation ID. If None, generates a new UUID.

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    """Clear correlation ID from the current context."""
    correlation_id_var.set(None)


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context.

    Returns:
        Current correlation ID or None if not set
    """
    return correlation_id_var.get()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Session Transport.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs only to stderr.
        json_format: If True, use JSON format. If False, use human-readable format.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(config: "LoggingConfig") -> None:
    """
    Configure structured logging from the ``logging`` section of the config file.

    An empty ``file`` logs to stderr; ``format`` selects JSON or console output.
    """
    setup_logging(
        level=config.level,
        log_file=Path(config.file) if config.file else None,
        json_format=config.format == "json",
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Structured logger instance.
    """
    if name == "session_transport" or name.startswith("session_transport."):
        return structlog.get_logger(name)
    return structlog.get_logger(f"session_transport.{name}")


# Convenience functions for common logging patterns

def log_transport_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: int,
    duration_ms: float,
    multipart: bool = False,
    **kwargs: Any,
) -> None:
    """
    Log a completed call to the external request function.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Request URL (without query string)
        status_code: Status code returned by the request function
        duration_ms: Time spent awaiting the request function
        multipart: Whether the body was multipart-encoded
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "transport_request",
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": duration_ms,
        "multipart": multipart,
    }

    log_data.update(kwargs)

    logger.debug("transport_request_completed", **log_data)


def log_transport_failure(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    error: BaseException,
    duration_ms: Optional[float] = None,
    **kwargs: Any,
) -> None:
    """
    Log a failure raised by the external request function.

    The error itself is re-raised by the caller; this only records it.

    Args:
        logger: Logger instance
        method: HTTP method
        url: Request URL (without query string)
        error: Exception raised by the request function
        duration_ms: Time spent awaiting the request function
        **kwargs: Additional context to log
    """
    log_data: Dict[str, Any] = {
        "event_type": "transport_failure",
        "method": method,
        "url": url,
        "error_type": type(error).__name__,
        "error": str(error),
    }

    if duration_ms is not None:
        log_data["duration_ms"] = duration_ms

    log_data.update(kwargs)

    logger.warning("transport_request_failed", **log_data)
