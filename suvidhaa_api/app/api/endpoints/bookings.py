"""
Booking endpoints.

All routes require a signed-in caller.  The customer of a new booking is
always the caller.  ``GET /bookings`` shows providers only their own
bookings and everyone else all bookings; see ``core.policy``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from suvidhaa_api.app.api.deps import get_booking_service, server_error
from suvidhaa_api.app.core.db import StoreError
from suvidhaa_api.app.core.exceptions import ServiceError
from suvidhaa_api.app.core.security import get_current_user
from suvidhaa_api.app.schemas.booking import BookingCreate, BookingStatusUpdate
from suvidhaa_api.app.services.booking_service import BookingService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: BookingCreate,
    current_user: dict = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    """Create a booking with status ``pending`` for the caller."""
    try:
        created = await bookings.create_booking(current_user["user_id"], booking)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {"message": "Booking created successfully", "booking": created}


@router.get("/my-bookings")
async def list_my_bookings(
    current_user: dict = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    """Bookings made by the caller, newest first."""
    try:
        return await bookings.list_my_bookings(current_user["user_id"])
    except StoreError as e:
        raise server_error(e)


@router.get("")
async def list_bookings(
    current_user: dict = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
) -> List[Dict[str, Any]]:
    try:
        return await bookings.list_bookings(current_user["user_id"], current_user["role"])
    except StoreError as e:
        raise server_error(e)


@router.patch("/{booking_id}/status")
async def update_booking_status(
    body: BookingStatusUpdate,
    booking_id: str = Path(..., description="Document id or BK booking number"),
    current_user: dict = Depends(get_current_user),
    bookings: BookingService = Depends(get_booking_service),
) -> Dict[str, Any]:
    """Change the status of a booking."""
    try:
        updated = await bookings.update_status(
            current_user["user_id"], current_user["role"], booking_id, body.status
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except StoreError as e:
        raise server_error(e)
    return {"message": "Booking status updated", "booking": updated}
