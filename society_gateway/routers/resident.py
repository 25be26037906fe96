"""
Resident dashboard endpoints for the Society Gateway

GET  /api/resident/complaints  - complaints filed by the signed-in resident
POST /api/resident/complaints  - file a complaint
POST /api/resident/events      - request a venue booking

Failures use the ``{"success": false, "message": ...}`` envelope the
resident pages expect.
"""

from fastapi import APIRouter, Depends, Request

from society_gateway.api.deps import get_forwarder, relay
from society_gateway.forwarder import Forwarder

router = APIRouter(prefix="/api/resident", tags=["resident"])


@router.get("/complaints")
async def list_complaints(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "complaints", "GET")


@router.post("/complaints")
async def submit_complaint(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "complaints", "POST")


@router.post("/events")
async def book_event(request: Request, forwarder: Forwarder = Depends(get_forwarder)):
    return await relay(forwarder, request, "events", "POST")
