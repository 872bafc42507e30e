"""
Pydantic models for user accounts.

Request bodies use the camelCase names clients send (``fullName``); the
Python attributes are snake_case.  Fields of the signup and login bodies
are optional at the schema level so that ``UserService`` can answer with
its own messages when something is missing.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Schema for registering a customer account."""

    full_name: Optional[str] = Field(None, alias="fullName", examples=["Priya Sharma"])
    email: Optional[str] = Field(None, examples=["priya@example.com"])
    phone: Optional[str] = Field(None, examples=["+91 98200 00000"])
    gender: Optional[str] = Field(None, examples=["female"], description="male, female or other")
    password: Optional[str] = Field(None, examples=["strongpassword"])

    model_config = {
        "populate_by_name": True,
    }


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["priya@example.com"])
    password: Optional[str] = Field(None, examples=["strongpassword"])


class UserPublic(BaseModel):
    """Public projection of a user returned next to a session token."""

    id: str
    full_name: str = Field(..., alias="fullName")
    email: str
    role: str

    model_config = {
        "populate_by_name": True,
    }
