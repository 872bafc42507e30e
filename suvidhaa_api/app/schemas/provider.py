"""
Pydantic models for provider profiles.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ProviderRegister(BaseModel):
    """Schema for turning the signed-in user into a service provider."""

    services: List[str] = Field(default_factory=list, examples=[["Plumbing", "Electrical"]])
    experience: Optional[float] = Field(None, ge=0, examples=[5], description="Years of experience")
    location: Optional[str] = Field(None, examples=["Mumbai"])
    availability: Optional[str] = Field(None, examples=["Mon-Sat, 9am-6pm"])
