"""
Centralized configuration for the Society Gateway.
All settings come from environment variables for 12-factor deployment.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list:
    return [s.strip() for s in os.environ.get(name, default).split(",") if s.strip()]


# ---------------------------------------------------------------------------
# Backend service (system of record)
# ---------------------------------------------------------------------------
BACKEND_URL = os.environ.get("BACKEND_URL", "http://localhost:3001").rstrip("/")
# Seconds allowed for a single forwarded call (connect + read).
BACKEND_TIMEOUT_SECONDS = float(os.environ.get("BACKEND_TIMEOUT_SECONDS", "10"))
# When false the caller's Cookie header is never relayed, even for
# session-authenticated operations.
FORWARD_SESSION_COOKIE = _env_bool("FORWARD_SESSION_COOKIE", True)

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
PORT = int(os.environ.get("PORT", "8001"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

# ---------------------------------------------------------------------------
# CORS: the dashboards send the backend session cookie, so origins must be
# explicit (credentials cannot be combined with a wildcard).
# ---------------------------------------------------------------------------
CORS_ORIGINS = _env_list("CORS_ORIGINS", f"{FRONTEND_URL},http://localhost:3000")
