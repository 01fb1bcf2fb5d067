"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for request tracing
- Structured logging formatter for consistent log output
- A helper for logging authentication and authorization decisions

Usage:
    from staybook.utils.logging import get_logger, log_auth_event

    logger = get_logger(__name__)
    log_auth_event(logger, "guard_forbidden", user_id="u-1", resource="listing:l-9")
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for correlation ID - thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new UUID-based correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current request context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that prefixes every line with the correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-correlation-id"

        base = super().format(record)

        # Prefix for easy grep/filtering
        return f"[{record.correlation_id}] {base}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with the correlation-ID formatter."""
    logging.basicConfig(level=level)
    for handler in logging.getLogger().handlers:
        handler.setFormatter(
            StructuredFormatter("%(levelname)s %(name)s: %(message)s")
        )


def log_auth_event(
    logger: logging.Logger,
    event: str,
    *,
    user_id: str | None = None,
    resource: str | None = None,
    reason: str | None = None,
    rejected: bool = False,
    **extra: Any,
) -> None:
    """Log an authentication or authorization decision with structured context.

    Credentials and secrets must never be passed here. User IDs are fine.

    Args:
        logger: Logger instance
        event: Event name (e.g., "identity_resolved", "guard_forbidden")
        user_id: Caller user ID if known
        resource: Target resource as "<kind>:<id>"
        reason: Short machine-readable reason for the decision
        rejected: Whether the request was rejected (logged as warning)
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"event": event}

    if user_id:
        context["user_id"] = user_id
    if resource:
        context["resource"] = resource
    if reason:
        context["reason"] = reason

    context.update(extra)

    msg_parts = [f"Auth event: {event}"]
    for key, value in context.items():
        if key != "event":
            msg_parts.append(f"{key}={value}")

    message = " | ".join(msg_parts)

    if rejected:
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)
