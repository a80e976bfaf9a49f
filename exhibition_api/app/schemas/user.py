"""
Pydantic models for exhibition users.

Registration payload fields default to empty strings so that a missing
field reaches the service layer and is reported with the
``missing-credentials`` error tag rather than a validation error.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: str = Field("", examples=["alice"])
    email: str = Field("", examples=["a@x.com"])
    usercontacts: str = Field("", examples=["555-0100"])


class UserUpdate(BaseModel):
    """Schema for updating a user profile.

    Fields left out of the payload keep their stored value.
    """

    email: Optional[str] = Field(None, examples=["alice@example.com"])
    usercontacts: Optional[str] = Field(None, examples=["555-0199"])


class UserRead(BaseModel):
    """A registered user as stored and returned by the API.

    ``products`` holds the names of the products the user owns; the
    product records themselves live only in the product collection.
    """

    username: str
    id: str = Field(..., description="Caller principal that registered the user")
    email: str
    usercontacts: str
    products: List[str] = Field(default_factory=list)
    created_at: datetime
