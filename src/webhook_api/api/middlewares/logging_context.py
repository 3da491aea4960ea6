"""Per-request logging context and access log."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.webhook_api.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)

# Probes are too frequent to be worth an access log line
_UNLOGGED_PATHS = frozenset({"/health", "/metrics"})


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to the log context and log each API request once."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    start = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in _UNLOGGED_PATHS:
            logger.info(
                "request.completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        return response
    finally:
        clear_request_context()
