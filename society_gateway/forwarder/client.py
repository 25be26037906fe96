"""
Society Gateway — request forwarder.

Wraps every call to the society backend behind a single primitive::

    forwarder = Forwarder(BackendSettings.from_config())
    result    = await forwarder.forward("payments", "POST", body=payload, cookie=cookie)
    result.status_code, result.body

Each call is validated first (no I/O on rejection), then sent exactly once
(no retries, no caching) and the backend answer is normalized into a
``ForwardResult``.
"""

from __future__ import annotations

import logging
import time
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Dict, Mapping, Optional

import httpx

from society_gateway.domain.enums import Outcome, Verb
from society_gateway.domain.models import BackendSettings, ForwardResult
from society_gateway.forwarder.descriptors import Operation, get_operation
from society_gateway.forwarder.errors import (
    BackendFailure,
    ForwarderError,
    RequestValidationFailure,
    TransportFailure,
)
from society_gateway.forwarder.validation import resolve_path, validate_body
from society_gateway.metrics import record_forward

logger = logging.getLogger(__name__)

_JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

_ERROR_KEYS = ("error", "message", "detail")


def _stateless_cookie_jar() -> CookieJar:
    # Rejects every Set-Cookie so one caller's session never leaks into the
    # shared client; sessions travel per request as a Cookie header.
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


def _caller_status(backend_status: int) -> int:
    return backend_status if 400 <= backend_status <= 599 else 500


def backend_error_message(op: Operation, response: httpx.Response) -> str:
    """Human-readable message for a non-2xx backend response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in _ERROR_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return f"{op.failure_message} ({op.label} error: {response.status_code})"


class Forwarder:
    """Async forwarder from dashboard requests to the society backend.

    Instantiate once per process; the internal httpx.AsyncClient is
    lazily created and reused across calls.  Pass ``client`` or
    ``transport`` to route calls elsewhere (tests use
    ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: BackendSettings,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._client = client
        self._transport = transport
        self._owns_client = client is None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout_seconds),
                transport=self._transport,
                cookies=_stateless_cookie_jar(),
                follow_redirects=False,
            )
            self._owns_client = True
        return self._client

    def _headers(self, op: Operation, cookie: Optional[str]) -> Dict[str, str]:
        headers = dict(_JSON_HEADERS)
        headers.update(self.settings.default_headers)
        if op.with_session and cookie and self.settings.forward_session_cookie:
            headers["Cookie"] = cookie
        return headers

    async def _send(
        self,
        op: Operation,
        path: str,
        payload: Optional[Dict[str, Any]],
        cookie: Optional[str],
    ) -> Any:
        url = self.settings.url_for(path)
        client = await self._client_get()
        started = time.perf_counter()
        try:
            response = await client.request(
                op.verb.value, url, headers=self._headers(op, cookie), json=payload,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportFailure(op.failure_message) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info(
            "%s %s -> %d (%.0f ms)", op.verb.value, url, response.status_code, elapsed_ms,
        )

        if not response.is_success:
            raise BackendFailure(
                backend_error_message(op, response),
                status_code=_caller_status(response.status_code),
                backend_status=response.status_code,
            )

        if not op.reads_body:
            return op.respond(None)
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportFailure(op.failure_message) from exc
        try:
            return op.respond(data)
        except (TypeError, ValueError) as exc:
            raise TransportFailure(op.failure_message) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def forward(
        self,
        resource: str,
        verb: Verb | str,
        body: Any = None,
        path_params: Optional[Mapping[str, Any]] = None,
        cookie: Optional[str] = None,
    ) -> ForwardResult:
        """Validate, forward and normalize one dashboard request.

        Raises ``UnknownOperation`` for an unregistered (resource, verb)
        pair; every other failure comes back as a ``ForwardResult`` carrying
        the operation's failure envelope.
        """
        op = get_operation(resource, verb)
        try:
            path = resolve_path(op, path_params)
            payload = validate_body(op, body)
            shaped = await self._send(op, path, payload, cookie)
        except RequestValidationFailure as exc:
            return self._reject(op, exc)
        except BackendFailure as exc:
            logger.warning(
                "Backend rejected %s %s with %d: %s",
                op.verb.value, op.resource, exc.backend_status, exc.message,
            )
            return self._fail(op, exc, Outcome.BACKEND)
        except TransportFailure as exc:
            logger.error(
                "Could not %s: %s", op.action, exc.__cause__ or exc, exc_info=exc.__cause__,
            )
            return self._fail(op, exc, Outcome.TRANSPORT)

        record_forward(Outcome.OK)
        return ForwardResult.success(shaped)

    def reject(self, resource: str, verb: Verb | str, failure: RequestValidationFailure) -> ForwardResult:
        """Fail a call whose input was rejected before ``forward()`` could run."""
        return self._reject(get_operation(resource, verb), failure)

    def _reject(self, op: Operation, exc: RequestValidationFailure) -> ForwardResult:
        logger.info("Rejected %s %s: %s", op.verb.value, op.resource, exc.message)
        return self._fail(op, exc, Outcome.VALIDATION)

    @staticmethod
    def _fail(op: Operation, exc: ForwarderError, outcome: Outcome) -> ForwardResult:
        record_forward(outcome)
        return ForwardResult.failure(exc.status_code, exc.message, op.envelope)

    async def close(self) -> None:
        """Cleanly close the underlying HTTP client (if this forwarder owns it)."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
