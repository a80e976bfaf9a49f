"""
Pydantic schemas for product enquiries.

An enquiry is a message from a prospective buyer about a specific
product, identified by the product name and the sender's email.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class EnquiryCreate(BaseModel):
    productname: str = Field("", examples=["Widget"])
    useremail: str = Field("", examples=["buyer@example.com"])
    enquire: str = Field("", description="Enquiry text", examples=["Is it available in blue?"])


class EnquiryRead(BaseModel):
    id: str
    productname: str
    useremail: str
    enquire: str
    created_at: datetime
