"""
Request-scoped helpers shared by every gateway router.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from society_gateway.domain.enums import Verb
from society_gateway.domain.models import ForwardResult
from society_gateway.forwarder import Forwarder, RequestValidationFailure


def get_forwarder(request: Request) -> Forwarder:
    """FastAPI dependency: the process-wide forwarder built in the lifespan."""
    return request.app.state.forwarder


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or ``None`` when the request has no body.

    Raises ``ValueError`` when the body is present but is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    return await request.json()


def _render(result: ForwardResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


async def relay(
    forwarder: Forwarder,
    request: Request,
    resource: str,
    verb: str,
    path_params: Optional[Mapping[str, Any]] = None,
) -> JSONResponse:
    """Forward one dashboard call and render the normalized result.

    The JSON body is read here for verbs that carry one, so an undecodable
    body fails with the operation's own envelope.  The caller's ``Cookie``
    header is handed over unmodified; the forwarder decides per operation
    whether it travels to the backend.
    """
    body = None
    if Verb(verb).carries_body:
        try:
            body = await read_json_body(request)
        except ValueError:
            failure = RequestValidationFailure("body", "Request body must be valid JSON")
            return _render(forwarder.reject(resource, verb, failure))

    result = await forwarder.forward(
        resource,
        verb,
        body=body,
        path_params=path_params,
        cookie=request.headers.get("cookie"),
    )
    return _render(result)
