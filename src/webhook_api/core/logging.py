"""Logging configuration using structlog."""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

from src.webhook_api.core.errors import ApiError


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, use JSON for production.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Set library log levels to reduce noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
    """
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_principal_context(user_id: str) -> None:
    """Bind the calling principal to all subsequent log calls."""
    bind_contextvars(user_id=user_id)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()


@contextmanager
def log_operation(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    **fields: Any,
) -> Iterator[dict[str, Any]]:
    """Log the start and outcome of a service operation with its duration.

    Emits ``<operation>.start`` on entry, then ``<operation>.success``,
    ``<operation>.rejected`` (typed ApiError) or ``<operation>.error``.
    The yielded dict collects extra fields for the success event.

    Args:
        logger: Logger to emit on.
        operation: Dotted operation name, e.g. ``project.create``.
        **fields: Identifying fields attached to every event.
    """
    start = time.perf_counter()
    outcome: dict[str, Any] = {}
    logger.debug(f"{operation}.start", **fields)
    try:
        yield outcome
    except ApiError as e:
        logger.warning(
            f"{operation}.rejected",
            duration_ms=_elapsed_ms(start),
            status_code=e.status_code,
            reason=e.message,
            **fields,
        )
        raise
    except Exception as e:
        logger.error(
            f"{operation}.error",
            duration_ms=_elapsed_ms(start),
            error=str(e),
            **fields,
        )
        raise
    logger.info(f"{operation}.success", duration_ms=_elapsed_ms(start), **fields, **outcome)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
