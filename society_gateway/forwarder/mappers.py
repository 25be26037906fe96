"""
Pure projections from backend listings to dashboard views.

Each mapper validates every entry against its lenient *Record* schema and
then flattens it.  Missing fields map to defaults ("N/A", 0, false, "");
they never raise.  The only rejected input is a payload whose shape is not
a list of objects, reported as ``TypeError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from society_gateway.api.schemas import (
    BillRecord,
    PaymentView,
    ResidentRecord,
    ResidentView,
)
from society_gateway.core.utils import format_iso_date, stringify_id
from society_gateway.domain.enums import BillType, ResidentStatus

NOT_AVAILABLE = "N/A"


def _join_name(first: Optional[str], last: Optional[str]) -> str:
    return " ".join(part.strip() for part in (first, last) if part and part.strip())


def _flat_label(block: Optional[str], flat_number: Optional[str]) -> str:
    if not block and not flat_number:
        return NOT_AVAILABLE
    return f"{block or ''}-{flat_number or ''}"


def _records(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, list):
        raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise TypeError(f"entry {index} is {type(entry).__name__}, expected an object")
    return payload


# ---------------------------------------------------------------------------
# Residents
# ---------------------------------------------------------------------------

def map_resident(raw: Dict[str, Any]) -> ResidentView:
    rec = ResidentRecord.model_validate(raw)
    return ResidentView(
        id=stringify_id(rec.id),
        name=_join_name(rec.first_name, rec.last_name),
        flat=_flat_label(rec.block, rec.flat_number),
        joined=format_iso_date(rec.created_at) or NOT_AVAILABLE,
        email=rec.email or "",
        phone=rec.mobile_number or "",
        members=rec.number_of_member or 0,
        vehicles=int(rec.two_wheeler) + int(rec.four_wheeler),
        status=(
            ResidentStatus.ACTIVE.value
            if rec.status == ResidentStatus.ACTIVE.value
            else ResidentStatus.INACTIVE.value
        ),
    )


def map_residents(payload: Any) -> List[Dict[str, Any]]:
    """Project ``GET /admin/api/residents`` into resident table rows."""
    return [map_resident(entry).to_wire() for entry in _records(payload)]


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

def map_payment(raw: Dict[str, Any]) -> PaymentView:
    bill = BillRecord.model_validate(raw)
    resident = bill.resident
    template = bill.bill_template
    amount = bill.amount or 0

    return PaymentView(
        id=stringify_id(bill.id),
        resident_name=(
            _join_name(resident.first_name, resident.last_name) or NOT_AVAILABLE
            if resident is not None else NOT_AVAILABLE
        ),
        flat=(
            _flat_label(resident.block, resident.flat_number)
            if resident is not None else NOT_AVAILABLE
        ),
        bill_title=(template.title if template and template.title else NOT_AVAILABLE),
        bill_type=(template.type if template and template.type else BillType.OTHER.value),
        base_amount=amount,
        penalty_amount=bill.penalty_amount or 0,
        # A zero/missing running total falls back to the base amount.
        current_amount=bill.current_amount or amount,
        due_date=bill.formatted_due_date,
        is_overdue=bill.is_overdue,
        days_overdue=bill.days_overdue or 0,
        is_paid=bill.is_paid,
        paid_at=bill.paid_at_formatted,
        payment_status=bill.payment_status,
        resident_id=stringify_id(resident.id) if resident is not None else "",
        bill_template_id=stringify_id(template.id) if template is not None else "",
    )


def map_payments(payload: Any) -> List[Dict[str, Any]]:
    """Project ``GET /admin/payments`` into payment table rows."""
    return [map_payment(entry).to_wire() for entry in _records(payload)]
