"""
Pydantic schemas for reminders.
"""

from datetime import datetime
from pydantic import field_validator

from softouch.schemas.base import CamelModel, as_utc


class ReminderCreate(CamelModel):
    reminder_date: datetime

    @field_validator("reminder_date")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class ReminderEvent(CamelModel):
    id: int
    title: str
    date: datetime
    location: str
    organizer: str


class ReminderResponse(CamelModel):
    id: int
    user_id: int
    event_id: int
    event: ReminderEvent
    reminder_date: datetime
    sent: bool
    created_at: datetime


class ReminderActionResponse(CamelModel):
    message: str
    reminder: ReminderResponse
