"""
Shapes shared by every domain.
"""

from pydantic import BaseModel, Field


class Confirmation(BaseModel):
    """Plain confirmation returned by write operations.

    Failures are reported as HTTP errors whose ``detail`` is
    ``{"tag": ..., "message": ...}`` (see ``services.errors``).
    """

    message: str = Field(..., examples=["Like added successfully."])
