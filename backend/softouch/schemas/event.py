"""
Pydantic schemas for event-related request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from softouch.schemas.base import CamelModel, as_utc, split_tags
from softouch.schemas.registration import RegistrationResponse
from softouch.schemas.user import UserSummary


class EventSort(str, Enum):
    date_desc = "date_desc"
    date_asc = "date_asc"
    title = "title"


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    organizer: str = Field(..., min_length=1, max_length=255)
    organizer_email: EmailStr
    date: datetime
    location: str = Field(..., min_length=1, max_length=255)
    skills_required: list[str] = []
    categories: list[str] = []
    event_image: Optional[str] = Field(None, max_length=500)

    @field_validator("skills_required", "categories", mode="before")
    @classmethod
    def split_tag_list(cls, value):
        return split_tags(value)

    @field_validator("date")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class EventResponse(CamelModel):
    id: int
    title: str
    description: str
    organizer: str
    organizer_email: str
    event_image: Optional[str] = None
    date: datetime
    location: str
    skills_required: list[str] = []
    categories: list[str] = []
    created_by: UserSummary
    registration_count: int = 0
    created_at: datetime


class EventDetailResponse(EventResponse):
    registrations: list[RegistrationResponse] = []


class MyRegisteredEvent(EventResponse):
    """An event together with the current user's own registration."""

    my_registration: RegistrationResponse


class EventListResponse(CamelModel):
    events: list[EventResponse]
    total: int
    page: int
    page_size: int
    cached: bool = False
