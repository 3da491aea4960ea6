"""Operational endpoints: cached database health probe and Prometheus metrics."""

import secrets
import time
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.webhook_api.core.config import get_settings
from src.webhook_api.core.db import get_session
from src.webhook_api.core.logging import get_logger

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds


@dataclass
class _CachedReport:
    report: dict[str, Any]
    checked_at: float

    def age(self, now: float) -> float:
        return now - self.checked_at


_last_report: _CachedReport | None = None


def reset_health_cache() -> None:
    """Forget the last probe result (for testing)."""
    global _last_report
    _last_report = None


async def _probe_database() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.database_unreachable", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


def _respond(report: dict[str, Any]) -> JSONResponse:
    status_code = 200 if report["status"] == "healthy" else 503
    return JSONResponse(content=report, status_code=status_code)


def setup_health_endpoint(app: FastAPI) -> None:
    """Register ``/health``; probe results are reused for HEALTH_CACHE_TTL seconds."""

    @app.get("/health", tags=["operations"])
    async def health() -> JSONResponse:
        global _last_report
        now = time.time()

        if _last_report is not None and _last_report.age(now) < HEALTH_CACHE_TTL:
            report = {
                **_last_report.report,
                "cached": True,
                "cache_age_seconds": round(_last_report.age(now), 1),
            }
            return _respond(report)

        database = await _probe_database()
        report = {
            "status": "healthy" if database == "healthy" else "unhealthy",
            "database": database,
            "cached": False,
            "timestamp": now,
        }
        _last_report = _CachedReport(report=report, checked_at=now)
        return _respond(report)


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics at ``/metrics``.

    When METRICS_API_KEY is set, scrapes must send it in ``X-Metrics-Key``.
    """
    metrics_key = get_settings().metrics_api_key
    instrumentator = Instrumentator().instrument(app)

    if not metrics_key:
        instrumentator.expose(app, endpoint="/metrics")
        return

    key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def require_metrics_key(api_key: str | None = Depends(key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, metrics_key):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(require_metrics_key)])
