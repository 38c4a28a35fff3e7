"""
Health endpoints (unauthenticated).

- GET /health       pings the database (5s ceiling), 503 when it is unreachable
- GET /health/live  process liveness only, no DB access
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core import db, settings

PING_TIMEOUT_S = 5.0

logger = logging.getLogger(__name__)

router = APIRouter()

_started_at = time.monotonic()


class DatabaseStatus(BaseModel):
    status: str
    latency: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str | None = None
    uptime: str
    database: DatabaseStatus


def _format_seconds(seconds: float) -> str:
    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
async def health():
    uptime = _format_seconds(time.monotonic() - _started_at)
    start = time.perf_counter()
    try:
        await db.ping(timeout_s=PING_TIMEOUT_S)
    except Exception:
        logger.exception("health_db_ping_failed")
        body = HealthResponse(
            status="degraded",
            version=settings.app_version(),
            uptime=uptime,
            database=DatabaseStatus(status="unhealthy"),
        )
        return JSONResponse(status_code=503, content=body.model_dump(exclude_none=True))

    latency_ms = (time.perf_counter() - start) * 1000
    return HealthResponse(
        status="ok",
        version=settings.app_version(),
        uptime=uptime,
        database=DatabaseStatus(status="healthy", latency=f"{latency_ms:.3f}ms"),
    )


@router.get("/health/live")
def liveness() -> dict:
    return {"status": "ok"}
