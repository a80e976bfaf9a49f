"""
Pydantic models for products, comments and likes.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Schema for showcasing a product."""

    name: str = Field("", examples=["Widget"])
    description: str = Field("", examples=["A hand-made widget"])
    owner: str = Field("", description="Username of the registered owner", examples=["alice"])


class CommentCreate(BaseModel):
    by: str = Field("", description="Username of the comment author", examples=["bob"])
    comment: str = Field("", examples=["Lovely finish!"])
    productname: str = Field("", examples=["Widget"])


class LikeCreate(BaseModel):
    productname: str = Field("", examples=["Widget"])


class CommentRead(BaseModel):
    id: str
    by: str
    comment: str
    product: str
    commented_at: datetime


class ProductRead(BaseModel):
    """A product as stored and returned by the API.

    ``likes`` lists the caller principals that liked the product, one
    entry per like.  ``deleted_at`` is only set on tombstoned products,
    which are never returned by the public operations.
    """

    name: str
    owner: str
    id: str
    description: str
    comments: List[CommentRead] = Field(default_factory=list)
    likes: List[str] = Field(default_factory=list)
    created_at: datetime
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
