"""
Pydantic schemas for event chat messages.
"""

from datetime import datetime
from pydantic import Field, field_validator

from softouch.schemas.base import CamelModel
from softouch.schemas.user import UserSummary


class MessageCreate(CamelModel):
    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message text is required")
        return value


class MessageResponse(CamelModel):
    id: int
    event_id: int
    user: UserSummary
    text: str
    date: datetime
