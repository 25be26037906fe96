"""
Society Gateway — backend record and dashboard view schemas (Pydantic).

Two families live here:

  • *Record* models describe what the backend may send.  Every field is
    optional and coerced leniently, so validating any JSON object succeeds;
    the listing projections are therefore total.
  • *View* models are the flattened shapes the dashboards render.  They are
    serialised with camelCase aliases (``residentName``, ``billTemplateId``…).
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from society_gateway.core.utils import parse_number


# ---------------------------------------------------------------------------
# Lenient field types
# ---------------------------------------------------------------------------

def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        number = parse_number(value)
        return None if number is None else str(number)
    return None


def _as_number(value: Any) -> Optional[Union[int, float]]:
    return parse_number(value)


def _as_flag(value: Any) -> bool:
    # Same truthiness the dashboards apply: "", 0, null and false are off.
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def _as_mapping(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


LooseText = Annotated[Optional[str], BeforeValidator(_as_text)]
LooseNumber = Annotated[Optional[Union[int, float]], BeforeValidator(_as_number)]
LooseFlag = Annotated[bool, BeforeValidator(_as_flag)]


class _BackendRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Backend records
# ---------------------------------------------------------------------------

class ResidentRecord(_BackendRecord):
    """A resident document as returned by ``GET /admin/api/residents``."""

    id: Any = Field(None, alias="_id")
    first_name: LooseText = None
    last_name: LooseText = None
    block: LooseText = None
    flat_number: LooseText = None
    email: LooseText = None
    mobile_number: LooseText = None
    number_of_member: LooseNumber = None
    two_wheeler: LooseFlag = False
    four_wheeler: LooseFlag = False
    status: LooseText = None
    created_at: Any = Field(None, alias="createdAt")


class BillTemplateRecord(_BackendRecord):
    id: Any = Field(None, alias="_id")
    title: LooseText = None
    type: LooseText = None


class BillRecord(_BackendRecord):
    """A resident bill as returned by ``GET /admin/payments``."""

    id: Any = Field(None, alias="_id")
    resident: Annotated[Optional[ResidentRecord], BeforeValidator(_as_mapping)] = None
    bill_template: Annotated[
        Optional[BillTemplateRecord], BeforeValidator(_as_mapping)
    ] = Field(None, alias="billTemplate")
    amount: LooseNumber = None
    penalty_amount: LooseNumber = Field(None, alias="penaltyAmount")
    current_amount: LooseNumber = Field(None, alias="currentAmount")
    formatted_due_date: LooseText = Field(None, alias="formattedDueDate")
    is_overdue: LooseFlag = Field(False, alias="isOverdue")
    days_overdue: LooseNumber = Field(None, alias="daysOverdue")
    is_paid: LooseFlag = Field(False, alias="isPaid")
    paid_at_formatted: LooseText = Field(None, alias="paidAtFormatted")
    payment_status: LooseText = Field(None, alias="paymentStatus")


# ---------------------------------------------------------------------------
# Dashboard views
# ---------------------------------------------------------------------------

class _View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ResidentView(_View):
    """Row of the admin residents table."""

    id: str
    name: str
    flat: str
    joined: str
    email: str
    phone: str
    members: Union[int, float]
    vehicles: int
    status: str


class PaymentView(_View):
    """Row of the admin payments table."""

    id: str
    resident_name: str
    flat: str
    bill_title: str
    bill_type: str
    base_amount: Union[int, float]
    penalty_amount: Union[int, float]
    current_amount: Union[int, float]
    due_date: Optional[str]
    is_overdue: bool
    days_overdue: Union[int, float]
    is_paid: bool
    paid_at: Optional[str]
    payment_status: Optional[str]
    resident_id: str
    bill_template_id: str


# ---------------------------------------------------------------------------
# Health (GET /api/health)
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    backend_url: str
    uptime_seconds: float
    forwarded: Dict[str, int] = Field(default_factory=dict)
    errors_last_hour: int = 0
