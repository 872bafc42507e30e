"""
Pydantic models for bookings.

A booking ties a customer (the signed-in caller) to a provider for one
service at a given date, time and place.  The customer is never part of
the request body; it comes from the session token.
"""

import datetime as dt
from typing import Optional, Union

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    provider_id: str = Field(..., alias="providerId", examples=["665f1c2e8b3e4a1d2c3b4a59"])
    service: str = Field(..., min_length=1, examples=["Plumbing"])
    date: Union[dt.datetime, dt.date] = Field(..., examples=["2025-09-01", "2025-09-01T10:30:00.000Z"])
    time: str = Field(..., min_length=1, examples=["10:30 AM"])
    location: str = Field(..., min_length=1, examples=["Andheri West, Mumbai"])
    amount: float = Field(..., ge=0, examples=[500])

    model_config = {
        "populate_by_name": True,
    }


class BookingStatusUpdate(BaseModel):
    """Schema for ``PATCH /bookings/{id}/status``.

    The value is checked against the booking status list by the service so
    that an unknown status gets a readable error message.
    """

    status: Optional[str] = Field(None, examples=["confirmed"])
