"""
Observability Infrastructure

Structured logging for scheduling operations. Every log line emitted while a
scheduling operation runs carries the operation name and a correlation id, so
a refused booking and the conflicts behind it can be read together.
"""

import contextvars
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from .config import settings

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
operation_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "scheduling_operation", default=""
)


class CorrelationIdProcessor:
    """Structlog processor adding the correlation id and current operation."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        operation = operation_var.get("")

        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        if operation:
            event_dict.setdefault("operation", operation)

        return event_dict


def add_service_context(
    logger: Any, name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def setup_structured_logging() -> None:
    """Configure structlog once for the process, JSON or console output."""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        add_service_context,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    # SQL echo follows LOG_SQL independently of the engine's echo flag
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.LOG_SQL else logging.WARNING
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation id for the current context, generating one if needed."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    return correlation_id_var.get("")


@contextmanager
def scheduling_operation(name: str, **context: Any) -> Iterator[str]:
    """
    Tag log lines emitted inside the block with an operation and its context.

    Reuses the caller's correlation id when one is set; nested operations keep
    the outer correlation id and report the inner operation name.

    Yields:
        The correlation id in effect for the block
    """
    correlation_id = get_correlation_id() or str(uuid.uuid4())
    correlation_token = correlation_id_var.set(correlation_id)
    operation_token = operation_var.set(name)
    try:
        with structlog.contextvars.bound_contextvars(
            **{k: str(v) for k, v in context.items() if v is not None}
        ):
            yield correlation_id
    finally:
        operation_var.reset(operation_token)
        correlation_id_var.reset(correlation_token)
