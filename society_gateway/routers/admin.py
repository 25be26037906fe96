"""
Admin dashboard endpoints for the Society Gateway

GET    /api/admin/employees        - employee roster + stats
POST   /api/admin/employees        - add an employee
GET    /api/admin/residents        - flattened resident rows
POST   /api/admin/residents        - register a new resident
DELETE /api/admin/residents/{id}   - remove a resident
GET    /api/admin/payments         - flattened bill rows
POST   /api/admin/payments         - create a bill for every resident
PUT    /api/admin/payments/{id}    - mark a bill as paid
"""

from fastapi import APIRouter, Depends, Request

from society_gateway.api.deps import get_forwarder, relay
from society_gateway.forwarder import Forwarder

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/employees")
async def list_employees(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "employees", "GET")


@router.post("/employees")
async def create_employee(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "employees", "POST")


@router.get("/residents")
async def list_residents(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "residents", "GET")


@router.post("/residents")
async def create_resident(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "residents", "POST")


@router.delete("/residents/{resident_id}")
async def delete_resident(
    resident_id: str,
    request: Request,
    forwarder: Forwarder = Depends(get_forwarder),
):
    return await relay(
        forwarder, request, "residents", "DELETE", path_params={"id": resident_id},
    )


@router.get("/payments")
async def list_payments(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "payments", "GET")


@router.post("/payments")
async def create_bill(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "payments", "POST")


@router.put("/payments/{payment_id}")
async def mark_payment_paid(
    payment_id: str,
    request: Request,
    forwarder: Forwarder = Depends(get_forwarder),
):
    return await relay(
        forwarder, request, "payments", "PUT", path_params={"id": payment_id},
    )
