"""
Society Gateway - FastAPI Application
Main entry point for the forwarding server.

Run with:
    uvicorn society_gateway.app:app --reload --host 0.0.0.0 --port 8001
"""

import json
import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from society_gateway import config
from society_gateway.api.routes import APP_VERSION, register_routes
from society_gateway.core.logging import configure_logging
from society_gateway.domain.models import BackendSettings
from society_gateway.forwarder import Forwarder
from society_gateway.metrics import record_error

configure_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared forwarder on startup (unless one was injected) and close it on shutdown."""
    owned = getattr(app.state, "forwarder", None) is None
    if owned:
        app.state.forwarder = Forwarder(BackendSettings.from_config())
    logger.info("Forwarding to backend at %s", app.state.forwarder.settings.base_url)

    yield  # Application is running

    if owned:
        await app.state.forwarder.close()
        app.state.forwarder = None


# ---------------------------------------------------------------------------
# Middleware / handlers
# ---------------------------------------------------------------------------

async def request_logging_middleware(request: Request, call_next):
    """Emit one ``request_log {json}`` line per request and tag it with X-Request-ID."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        record_error()
        raise

    if response.status_code >= 500:
        record_error()
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_log %s",
        json.dumps({
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000.0, 1),
        }),
    )
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Answer unhandled errors with the admin failure envelope; details stay in the log."""
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method, request.url.path, exc, traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

def create_app(forwarder: Optional[Forwarder] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass ``forwarder`` to reuse an existing one (tests inject a forwarder
    backed by ``httpx.MockTransport``); otherwise the lifespan builds one
    from ``society_gateway.config``.
    """
    application = FastAPI(
        title="Society Gateway",
        version=APP_VERSION,
        description="Validating request forwarder between the society dashboards and the backend",
        lifespan=lifespan,
    )
    application.state.forwarder = forwarder

    # CORS -- the dashboards send the backend session cookie, so credentials
    # must be allowed for the configured origins.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    application.middleware("http")(request_logging_middleware)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    register_routes(application)
    return application


# Module-level instance used by uvicorn.
app = create_app()


# ---------------------------------------------------------------------------
# Development entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "society_gateway.app:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=True,
    )
