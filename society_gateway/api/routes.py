"""
Society Gateway — Centralised router registration.

This module is the single place where every APIRouter is mounted onto the
FastAPI application.  Import and call ``register_routes(app)`` once in
``society_gateway.app``.

  /api/admin/*     — admin dashboard resources (routers/admin.py)
  /api/resident/*  — resident dashboard resources (routers/resident.py)
  GET /api/health  — liveness + forwarding counters
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, FastAPI, Request

from society_gateway.api.schemas import HealthResponse
from society_gateway.metrics import metrics_snapshot

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Module-level start time for uptime reporting
_START_TIME: float = time.time()


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------

system_router = APIRouter(prefix="/api", tags=["system"])


@system_router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    snap = metrics_snapshot()
    forwarder = getattr(request.app.state, "forwarder", None)
    return HealthResponse(
        status="ok" if forwarder is not None else "starting",
        version=APP_VERSION,
        backend_url=forwarder.settings.base_url if forwarder is not None else "",
        uptime_seconds=round(time.time() - _START_TIME, 1),
        forwarded=snap["forwarded"],
        errors_last_hour=snap["errors_last_hour"],
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_routes(app: FastAPI) -> None:
    """Mount all routers onto ``app``.

    Call this once from ``society_gateway.app`` after creating the FastAPI
    instance.
    """
    from society_gateway.routers import admin, resident

    app.include_router(admin.router)
    app.include_router(resident.router)
    app.include_router(system_router)

    logger.debug("Routes registered: %d total endpoints", len(app.routes))
