"""
Per-operation descriptors for the request forwarder.

One ``Operation`` per (resource, verb) pair states where the call goes,
which input fields are checked and coerced, whether the caller's session
cookie travels with it, and how a successful backend body is shaped for
the dashboard.  ``forward()`` is the only consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from society_gateway.domain.enums import (
    BillType,
    ComplaintPriority,
    EmployeeStatus,
    EnvelopeStyle,
    Verb,
)
from society_gateway.forwarder.errors import UnknownOperation
from society_gateway.forwarder.mappers import map_payments, map_residents


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldRule:
    name: str
    required: bool = True
    numeric: bool = False
    positive: bool = False       # numeric value must be > 0
    non_negative: bool = False   # numeric value must be >= 0
    default: Any = None          # used when an optional field is absent
    choices: Tuple[str, ...] = ()
    min_length: int = 0
    lenient: bool = False        # unparsable numeric value falls back to ``default``


def _choices(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


# ---------------------------------------------------------------------------
# Success shaping
# ---------------------------------------------------------------------------

Responder = Callable[[Any], Any]


def passthrough(payload: Any) -> Any:
    return payload


def fixed_message(message: str) -> Responder:
    def _respond(_payload: Any) -> Dict[str, Any]:
        return {"message": message}
    return _respond


def message_with_data(message: str) -> Responder:
    def _respond(payload: Any) -> Dict[str, Any]:
        return {"message": message, "data": payload}
    return _respond


# ---------------------------------------------------------------------------
# Operation descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    resource: str
    verb: Verb
    path: str                                # may contain "{id}"-style placeholders
    action: str                              # "create bill" → "Failed to create bill"
    label: str                               # "Payments" → "Payments error: 500"
    fields: Tuple[FieldRule, ...] = ()
    path_params: Tuple[str, ...] = ()
    id_label: str = ""                       # "Payment" → "Payment ID is required"
    with_session: bool = False
    envelope: EnvelopeStyle = EnvelopeStyle.ERROR
    respond: Responder = passthrough
    reads_body: bool = True                  # success body must be JSON

    @property
    def failure_message(self) -> str:
        return f"Failed to {self.action}"

    @property
    def key(self) -> Tuple[str, Verb]:
        return (self.resource, self.verb)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_EMPLOYEE_FIELDS = (
    FieldRule("name"),
    FieldRule("role"),
    FieldRule("contact", numeric=True),
    FieldRule("salary", numeric=True, positive=True),
    FieldRule("join_date"),
    FieldRule("location"),
    FieldRule("status", choices=_choices(EmployeeStatus)),
)

_RESIDENT_FIELDS = (
    FieldRule("first_name"),
    FieldRule("last_name"),
    FieldRule("mobile_number", numeric=True),
    FieldRule("emergency_number", numeric=True),
    FieldRule("birth_date"),
    FieldRule("number_of_member", numeric=True, positive=True),
    FieldRule("block"),
    FieldRule("floor_number", numeric=True, non_negative=True),
    FieldRule("flat_number", numeric=True, non_negative=True),
    FieldRule("email"),
    FieldRule("create_password", min_length=6),
    FieldRule("role", required=False, default="resident"),
    FieldRule("status", required=False, default="active"),
)

_BILL_FIELDS = (
    FieldRule("title"),
    FieldRule("type", choices=_choices(BillType)),
    FieldRule("amount", numeric=True, positive=True),
    FieldRule("dueDate"),
    FieldRule(
        "penalty", required=False, numeric=True, non_negative=True, default=0, lenient=True,
    ),
)

_COMPLAINT_FIELDS = (
    FieldRule("title"),
    FieldRule("category"),
    FieldRule("priority", choices=_choices(ComplaintPriority)),
    FieldRule("description"),
)

_EVENT_FIELDS = (
    FieldRule("title"),
    FieldRule("venueId"),
    FieldRule("date"),
    FieldRule("startTime"),
    FieldRule("endTime"),
    FieldRule("attendees", required=False, numeric=True, positive=True, default=50),
)


OPERATIONS: Dict[Tuple[str, Verb], Operation] = {
    op.key: op
    for op in (
        # -- employees ------------------------------------------------------
        Operation(
            resource="employees", verb=Verb.GET, path="/admin/employees",
            action="fetch employees", label="Employees", with_session=True,
        ),
        Operation(
            resource="employees", verb=Verb.POST, path="/admin/employees",
            action="create employee", label="Employees", with_session=True,
            fields=_EMPLOYEE_FIELDS,
        ),
        # -- residents ------------------------------------------------------
        Operation(
            resource="residents", verb=Verb.GET, path="/admin/api/residents",
            action="fetch residents", label="Residents", respond=map_residents,
        ),
        Operation(
            resource="residents", verb=Verb.POST, path="/admin/addNewResident",
            action="create resident", label="Residents", with_session=True,
            fields=_RESIDENT_FIELDS,
        ),
        Operation(
            resource="residents", verb=Verb.DELETE, path="/admin/residents/{id}",
            action="delete resident", label="Residents", with_session=True,
            path_params=("id",), id_label="Resident",
            respond=fixed_message("Resident deleted successfully"), reads_body=False,
        ),
        # -- payments / bills -----------------------------------------------
        Operation(
            resource="payments", verb=Verb.GET, path="/admin/payments",
            action="fetch payments", label="Payments", respond=map_payments,
        ),
        Operation(
            resource="payments", verb=Verb.POST, path="/admin/createBill",
            action="create bill", label="Payments", with_session=True,
            fields=_BILL_FIELDS, respond=message_with_data("Bill created successfully"),
        ),
        Operation(
            resource="payments", verb=Verb.PUT, path="/admin/payments/mark/{id}",
            action="update payment", label="Payments", with_session=True,
            path_params=("id",), id_label="Payment",
            respond=fixed_message("Payment marked as paid successfully"), reads_body=False,
        ),
        # -- resident-facing ------------------------------------------------
        Operation(
            resource="complaints", verb=Verb.GET, path="/resident/api/complaints",
            action="fetch complaints", label="Complaints", with_session=True,
            envelope=EnvelopeStyle.MESSAGE,
        ),
        Operation(
            resource="complaints", verb=Verb.POST, path="/resident/api/complaints",
            action="submit complaint", label="Complaints", with_session=True,
            envelope=EnvelopeStyle.MESSAGE, fields=_COMPLAINT_FIELDS,
        ),
        Operation(
            resource="events", verb=Verb.POST, path="/resident/api/events",
            action="book event", label="Events", with_session=True,
            envelope=EnvelopeStyle.MESSAGE, fields=_EVENT_FIELDS,
        ),
    )
}


def get_operation(resource: str, verb: Any) -> Operation:
    """Return the descriptor for ``(resource, verb)``.

    Raises ``UnknownOperation`` when the pair is not registered.
    """
    try:
        key = (resource, Verb(str(getattr(verb, "value", verb)).upper()))
    except ValueError:
        raise UnknownOperation(f"unsupported verb {verb!r} for {resource!r}") from None
    op: Optional[Operation] = OPERATIONS.get(key)
    if op is None:
        raise UnknownOperation(f"no operation registered for {key[1].value} {resource!r}")
    return op
