"""
society_gateway.domain.models — Canonical value objects.

``BackendSettings`` is the explicit configuration handed to the forwarder;
``ForwardResult`` is the normalized status + JSON body it hands back.

Import pattern::

    from society_gateway.domain.models import BackendSettings, ForwardResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from society_gateway.domain.enums import EnvelopeStyle


# ---------------------------------------------------------------------------
# Backend connection settings (injected, never read ambiently)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BackendSettings:
    """
    Everything the forwarder needs to reach the backend.

    Built once at startup from ``society_gateway.config`` and passed to
    ``Forwarder``; tests construct it directly.
    """
    base_url: str = "http://localhost:3001"
    timeout_seconds: Optional[float] = 10.0
    default_headers: Dict[str, str] = field(default_factory=dict)
    forward_session_cookie: bool = True

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_config(cls) -> "BackendSettings":
        from society_gateway import config

        return cls(
            base_url=config.BACKEND_URL,
            timeout_seconds=config.BACKEND_TIMEOUT_SECONDS,
            forward_session_cookie=config.FORWARD_SESSION_COOKIE,
        )


# ---------------------------------------------------------------------------
# Forwarding result
# ---------------------------------------------------------------------------

@dataclass
class ForwardResult:
    """Status code + JSON-serialisable body returned to the dashboard."""
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @classmethod
    def success(cls, body: Any) -> "ForwardResult":
        return cls(status_code=200, body=body)

    @classmethod
    def failure(cls, status_code: int, message: str, style: EnvelopeStyle) -> "ForwardResult":
        if style is EnvelopeStyle.MESSAGE:
            return cls(status_code=status_code, body={"success": False, "message": message})
        return cls(status_code=status_code, body={"error": message})
