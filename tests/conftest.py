"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • backend            — scripted stand-in for the society backend
  • make_forwarder(...) — Forwarder wired to ``backend`` via httpx.MockTransport
  • resident_doc / bill_doc — representative backend documents
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Callable, List, Optional

import httpx
import pytest

# Ensure the project root is on the path so all society_gateway imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from society_gateway.domain.models import BackendSettings  # noqa: E402
from society_gateway.forwarder import Forwarder  # noqa: E402
from society_gateway.metrics import reset_metrics_for_tests  # noqa: E402

BASE_URL = "http://backend.test"


# ---------------------------------------------------------------------------
# Scripted backend
# ---------------------------------------------------------------------------

class FakeBackend:
    """Records every outbound request and answers with a scripted response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responder: Callable[[httpx.Request], httpx.Response] = (
            lambda _req: httpx.Response(200, json={})
        )

    def reply(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None,
              headers: Optional[dict] = None) -> None:
        def _respond(_req: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, json=json_body, headers=headers)
        self._responder = _respond

    def fail_with(self, exc: Exception) -> None:
        def _respond(_req: httpx.Request) -> httpx.Response:
            raise exc
        self._responder = _respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_forwarder(backend):
    def _factory(**settings_kwargs) -> Forwarder:
        settings_kwargs.setdefault("base_url", BASE_URL)
        return Forwarder(
            BackendSettings(**settings_kwargs),
            transport=httpx.MockTransport(backend.handler),
        )
    return _factory


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics_for_tests()
    yield


# ---------------------------------------------------------------------------
# Backend documents
# ---------------------------------------------------------------------------

@pytest.fixture
def resident_doc() -> dict:
    return {
        "_id": "66f1a2b3c4d5e6f708192a3b",
        "first_name": "Asha",
        "last_name": "Mehta",
        "block": "A",
        "flat_number": 302,
        "email": "asha@example.com",
        "mobile_number": 9998887777,
        "number_of_member": 4,
        "two_wheeler": "GJ01AB1234",
        "four_wheeler": "",
        "status": "active",
        "createdAt": "2025-03-14T18:30:00.000Z",
    }


@pytest.fixture
def bill_doc(resident_doc) -> dict:
    return {
        "_id": "6700aa11bb22cc33dd44ee55",
        "resident": resident_doc,
        "billTemplate": {
            "_id": "6700aa11bb22cc33dd44ee00",
            "title": "Monthly Maintenance - April 2025",
            "type": "Maintenance",
        },
        "amount": 2500,
        "penaltyAmount": 100,
        "currentAmount": 2600,
        "formattedDueDate": "10 Apr 2025",
        "isOverdue": True,
        "daysOverdue": 5,
        "isPaid": False,
        "paidAtFormatted": None,
        "paymentStatus": "Overdue",
    }
