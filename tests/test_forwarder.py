"""
Tests for society_gateway.forwarder.client.Forwarder.

Covers:
  1. Validation failures make zero outbound calls
  2. Outbound URL, headers, body and cookie handling
  3. Success shaping (passthrough, projection, fixed message, message+data)
  4. Backend failures: parsed message vs. generic fallback, status propagation
  5. Transport failures: network errors and unusable payloads
  6. Metrics bookkeeping
"""

from __future__ import annotations

import httpx
import pytest

from society_gateway.forwarder import RequestValidationFailure, UnknownOperation
from society_gateway.metrics import metrics_snapshot

EMPLOYEE = {
    "name": "Asha",
    "role": "Cleaner",
    "contact": "9998887777",
    "salary": "12000",
    "join_date": "2025-01-01",
    "location": "Block A",
    "status": "Active",
}

BILL = {"title": "April maintenance", "type": "Maintenance", "amount": "2500", "dueDate": "2025-04-10"}

SESSION = "connect.sid=s%3Aabc.def; theme=dark"


# ---------------------------------------------------------------------------
# 1. Validation happens before I/O
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_missing_salary_is_rejected_without_network(backend, make_forwarder):
    body = dict(EMPLOYEE)
    del body["salary"]
    forwarder = make_forwarder()

    result = await forwarder.forward("employees", "POST", body=body)

    assert result.status_code == 400
    assert result.body == {"error": "salary is required"}
    assert backend.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("salary", ["abc", "0", "-10"])
async def test_bad_salary_is_rejected_without_network(backend, make_forwarder, salary):
    result = await make_forwarder().forward("employees", "POST", body={**EMPLOYEE, "salary": salary})
    assert result.status_code == 400
    assert "salary" in result.body["error"]
    assert backend.requests == []


@pytest.mark.asyncio
async def test_missing_path_id_is_rejected_without_network(backend, make_forwarder):
    result = await make_forwarder().forward("residents", "DELETE", path_params={"id": ""})
    assert result.status_code == 400
    assert result.body == {"error": "Resident ID is required"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_resident_validation_uses_message_envelope(backend, make_forwarder):
    result = await make_forwarder().forward("complaints", "POST", body={"title": "Leak"})
    assert result.status_code == 400
    assert result.body == {"success": False, "message": "category is required"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_unknown_operation_raises(make_forwarder):
    with pytest.raises(UnknownOperation):
        await make_forwarder().forward("parking", "GET")


# ---------------------------------------------------------------------------
# 2. Outbound request
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_employee_creation_example(backend, make_forwarder):
    backend.reply(200, {"message": "Employee added successfully"})

    result = await make_forwarder().forward("employees", "POST", body=EMPLOYEE, cookie=SESSION)

    assert result.status_code == 200
    assert result.body == {"message": "Employee added successfully"}
    assert len(backend.requests) == 1
    sent = backend.last
    assert sent.method == "POST"
    assert str(sent.url) == "http://backend.test/admin/employees"
    assert sent.headers["content-type"] == "application/json"
    assert sent.headers["accept"] == "application/json"
    assert sent.headers["cookie"] == SESSION
    assert backend.last_json() == {**EMPLOYEE, "contact": 9998887777, "salary": 12000}


@pytest.mark.asyncio
async def test_public_listing_does_not_send_cookie(backend, make_forwarder):
    backend.reply(200, [])
    await make_forwarder().forward("residents", "GET", cookie=SESSION)
    assert "cookie" not in backend.last.headers
    assert backend.last.content == b""


@pytest.mark.asyncio
async def test_cookie_forwarding_can_be_disabled(backend, make_forwarder):
    backend.reply(200, {"employees": [], "stats": {}})
    await make_forwarder(forward_session_cookie=False).forward("employees", "GET", cookie=SESSION)
    assert "cookie" not in backend.last.headers


@pytest.mark.asyncio
async def test_default_headers_are_sent(backend, make_forwarder):
    backend.reply(200, {"employees": [], "stats": {}})
    forwarder = make_forwarder(default_headers={"X-Gateway": "society"})
    await forwarder.forward("employees", "GET")
    assert backend.last.headers["x-gateway"] == "society"


@pytest.mark.asyncio
async def test_backend_set_cookie_is_not_replayed(backend, make_forwarder):
    forwarder = make_forwarder()
    backend.reply(200, {"employees": [], "stats": {}}, headers={"set-cookie": "connect.sid=leaked; Path=/"})
    await forwarder.forward("employees", "GET", cookie=SESSION)

    backend.reply(200, {"employees": [], "stats": {}})
    await forwarder.forward("employees", "GET")

    assert "cookie" not in backend.last.headers


@pytest.mark.asyncio
async def test_mark_paid_uses_put(backend, make_forwarder):
    backend.reply(200, text="")
    result = await make_forwarder().forward("payments", "PUT", path_params={"id": "bill42"}, cookie=SESSION)

    assert result.status_code == 200
    assert result.body == {"message": "Payment marked as paid successfully"}
    assert backend.last.method == "PUT"
    assert str(backend.last.url) == "http://backend.test/admin/payments/mark/bill42"


# ---------------------------------------------------------------------------
# 3. Success shaping
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_employee_listing_is_passed_through(backend, make_forwarder):
    payload = {"employees": [{"_id": "e1", "name": "Asha"}], "stats": {"total": 1, "active": 1}}
    backend.reply(200, payload)
    result = await make_forwarder().forward("employees", "GET")
    assert result.body == payload


@pytest.mark.asyncio
async def test_resident_listing_is_projected(backend, make_forwarder, resident_doc):
    no_date = dict(resident_doc, _id="r2")
    del no_date["createdAt"]
    backend.reply(200, [resident_doc, no_date])

    result = await make_forwarder().forward("residents", "GET")

    assert result.status_code == 200
    assert [row["id"] for row in result.body] == ["66f1a2b3c4d5e6f708192a3b", "r2"]
    assert result.body[0]["joined"] == "2025-03-14"
    assert result.body[1]["joined"] == "N/A"


@pytest.mark.asyncio
async def test_repeated_listing_is_identical(backend, make_forwarder, bill_doc):
    backend.reply(200, [bill_doc])
    forwarder = make_forwarder()
    first = await forwarder.forward("payments", "GET")
    second = await forwarder.forward("payments", "GET")
    assert first.body == second.body
    assert len(backend.requests) == 2  # never cached


@pytest.mark.asyncio
async def test_bill_creation_wraps_backend_result(backend, make_forwarder):
    backend.reply(201, {"_id": "tpl1", "billsCreated": 48})
    result = await make_forwarder().forward("payments", "POST", body=BILL, cookie=SESSION)

    assert result.status_code == 200
    assert result.body == {"message": "Bill created successfully", "data": {"_id": "tpl1", "billsCreated": 48}}
    assert backend.last_json() == {
        "title": "April maintenance", "type": "Maintenance",
        "amount": 2500, "dueDate": "2025-04-10", "penalty": 0,
    }


@pytest.mark.asyncio
async def test_delete_resident(backend, make_forwarder):
    backend.reply(204, text="")
    result = await make_forwarder().forward("residents", "DELETE", path_params={"id": "r1"}, cookie=SESSION)
    assert result.body == {"message": "Resident deleted successfully"}
    assert backend.last.method == "DELETE"


# ---------------------------------------------------------------------------
# 4. Backend failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_bill_creation_unparsable_500(backend, make_forwarder):
    backend.reply(500, text="<html>Internal Server Error</html>")
    result = await make_forwarder().forward("payments", "POST", body=BILL)

    assert result.status_code == 500
    assert result.body == {"error": "Failed to create bill (Payments error: 500)"}


@pytest.mark.asyncio
async def test_backend_error_message_is_relayed(backend, make_forwarder):
    backend.reply(409, {"error": "Employee with this contact already exists"})
    result = await make_forwarder().forward("employees", "POST", body=EMPLOYEE)
    assert result.status_code == 409
    assert result.body == {"error": "Employee with this contact already exists"}


@pytest.mark.asyncio
async def test_unauthenticated_complaints(backend, make_forwarder):
    backend.reply(401, {"success": False, "message": "Please log in"})
    result = await make_forwarder().forward("complaints", "GET")
    assert result.status_code == 401
    assert result.body == {"success": False, "message": "Please log in"}


@pytest.mark.asyncio
async def test_redirect_status_maps_to_500(backend, make_forwarder):
    backend.reply(302, text="", headers={"location": "/login"})
    result = await make_forwarder().forward("employees", "GET")
    assert result.status_code == 500
    assert result.body == {"error": "Failed to fetch employees (Employees error: 302)"}


# ---------------------------------------------------------------------------
# 5. Transport failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_connection_error(backend, make_forwarder):
    backend.fail_with(httpx.ConnectError("connection refused"))
    result = await make_forwarder().forward("residents", "GET")
    assert result.status_code == 500
    assert result.body == {"error": "Failed to fetch residents"}


@pytest.mark.asyncio
async def test_timeout_on_resident_endpoint(backend, make_forwarder):
    backend.fail_with(httpx.ReadTimeout("too slow"))
    result = await make_forwarder().forward("events", "POST", body={
        "title": "Birthday", "venueId": "v1", "date": "2025-06-01",
        "startTime": "18:00", "endTime": "21:00",
    })
    assert result.status_code == 500
    assert result.body == {"success": False, "message": "Failed to book event"}


@pytest.mark.asyncio
async def test_listing_with_wrong_shape(backend, make_forwarder):
    backend.reply(200, {"residents": []})
    result = await make_forwarder().forward("residents", "GET")
    assert result.status_code == 500
    assert result.body == {"error": "Failed to fetch residents"}


@pytest.mark.asyncio
async def test_success_with_unparsable_body(backend, make_forwarder):
    backend.reply(200, text="OK")
    result = await make_forwarder().forward("complaints", "GET")
    assert result.status_code == 500
    assert result.body == {"success": False, "message": "Failed to fetch complaints"}


# ---------------------------------------------------------------------------
# 6. Metrics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_outcomes_are_counted(backend, make_forwarder):
    forwarder = make_forwarder()
    backend.reply(200, [])
    await forwarder.forward("payments", "GET")
    await forwarder.forward("payments", "POST", body={})
    backend.reply(503, text="")
    await forwarder.forward("payments", "GET")
    backend.fail_with(httpx.ConnectError("down"))
    await forwarder.forward("payments", "GET")

    assert metrics_snapshot()["forwarded"] == {
        "ok": 1, "validation": 1, "backend": 1, "transport": 1,
    }


@pytest.mark.asyncio
async def test_close_is_idempotent(make_forwarder, backend):
    forwarder = make_forwarder()
    backend.reply(200, [])
    await forwarder.forward("payments", "GET")
    await forwarder.close()
    await forwarder.close()


@pytest.mark.asyncio
async def test_reject_uses_operation_envelope(backend, make_forwarder):
    forwarder = make_forwarder()
    failure = RequestValidationFailure("body", "Request body must be valid JSON")
    admin = forwarder.reject("payments", "POST", failure)
    resident = forwarder.reject("events", "post", failure)

    assert admin.status_code == 400
    assert admin.body == {"error": "Request body must be valid JSON"}
    assert resident.body == {"success": False, "message": "Request body must be valid JSON"}
    assert metrics_snapshot()["forwarded"]["validation"] == 2
    assert backend.requests == []
