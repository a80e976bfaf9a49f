"""
Pydantic schemas for general questions addressed to the organisers.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class QuestionCreate(BaseModel):
    question: str = Field("", examples=["When does the exhibition open?"])
    useremail: str = Field("", examples=["visitor@example.com"])


class QuestionRead(BaseModel):
    id: str
    question: str
    useremail: str
    created_at: datetime
