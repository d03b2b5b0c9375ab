"""
Logging setup for the retail admin service.

Structured logging with per-request context (request ID and acting user)
carried across awaits through context variables. Call sites attach extra
structured data with ``extra={"extra_fields": {...}}``.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional
from uuid import uuid4

request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
actor_context: ContextVar[Optional[str]] = ContextVar("actor", default=None)


def _context_fields() -> Dict[str, str]:
    fields: Dict[str, str] = {}
    request_id = request_id_context.get()
    if request_id:
        fields["request_id"] = request_id
    actor = actor_context.get()
    if actor:
        fields["actor"] = actor
    return fields


class StructuredFormatter(logging.Formatter):
    """JSON log lines for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        log_data.update(_context_fields())

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Single-line formatter for local development.

    Appends request context and structured fields as ``key=value`` pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            self.formatTime(record, self.datefmt),
            f"{record.levelname:8}",
            f"[{record.name}]",
        ]

        context = _context_fields()
        if "request_id" in context:
            parts.append(f"[req:{context['request_id'][:8]}]")
        if "actor" in context:
            parts.append(f"[actor:{context['actor']}]")

        parts.append(record.getMessage())

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            parts.append(" ".join(f"{key}={value}" for key, value in extra_fields.items()))

        message = " ".join(parts)
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    log_level: str = "INFO",
    service_name: str = "retail-admin-service",
    use_json: bool = False,
) -> logging.Logger:
    """
    Configure root logging for the service.

    Args:
        log_level: Logging level name
        service_name: Name of the service logger
        use_json: Emit JSON lines instead of console lines

    Returns:
        The service logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = ConsoleFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(service_name)
    logger.setLevel(numeric_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger, defaulting to the service logger."""
    return logging.getLogger(name or "retail-admin-service")


def set_request_context(
    request_id: Optional[str] = None, actor: Optional[str] = None
) -> str:
    """
    Bind request ID and actor to the current context.

    Args:
        request_id: Request ID to bind; a new UUID is generated if None
        actor: Identity of the caller performing the request, if known

    Returns:
        The request ID that was bound
    """
    if request_id is None:
        request_id = str(uuid4())
    request_id_context.set(request_id)
    actor_context.set(actor)
    return request_id


def get_request_id() -> Optional[str]:
    """Current request ID, if any."""
    return request_id_context.get()


def clear_request_context() -> None:
    """Clear request ID and actor from context."""
    request_id_context.set(None)
    actor_context.set(None)
