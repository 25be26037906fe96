"""Exception hierarchy for the request forwarder.

Every ``ForwarderError`` carries the HTTP status and the human-readable
message that end up in the failure envelope.
"""

from __future__ import annotations

from typing import Optional


class ForwarderError(Exception):
    """Base exception for all forwarding failures."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailure(ForwarderError):
    """Raised before any I/O when an input field is missing or invalid."""

    status_code = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class BackendFailure(ForwarderError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, backend_status: int) -> None:
        super().__init__(message, status_code)
        self.backend_status = backend_status


class TransportFailure(ForwarderError):
    """Raised on network errors or an unusable success payload."""

    status_code = 500


class UnknownOperation(LookupError):
    """Raised when no descriptor exists for a (resource, verb) pair."""
