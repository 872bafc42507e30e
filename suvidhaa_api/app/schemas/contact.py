"""
Pydantic models for contact form submissions.

Everything is optional here; ``ContactService`` decides which fields are
required so the response can say so in plain words.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ContactCreate(BaseModel):
    name: Optional[str] = Field(None, examples=["Rahul Verma"])
    email: Optional[str] = Field(None, examples=["rahul@example.com"])
    phone: Optional[str] = Field(None, examples=["+91 99870 00000"])
    subject: Optional[str] = Field(None, examples=["Question about bookings"])
    message: Optional[str] = Field(None, examples=["Can I reschedule a confirmed booking?"])
