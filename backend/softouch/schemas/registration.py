"""
Pydantic schemas for the registration lifecycle.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from softouch.models.registration import RegistrationStatus
from softouch.schemas.base import CamelModel
from softouch.schemas.user import UserSummary


class RegistrationCreate(CamelModel):
    contact: Optional[str] = Field(None, max_length=255)


class RegistrationStatusUpdate(CamelModel):
    # Out-of-enum values are rejected here, before the service runs
    status: RegistrationStatus


class RegistrationResponse(CamelModel):
    id: int
    event_id: int
    user_id: int
    user: Optional[UserSummary] = None
    status: RegistrationStatus
    checked_in: bool
    contact: Optional[str] = None
    registered_at: datetime


class RegistrationActionResponse(CamelModel):
    message: str
    registration: RegistrationResponse
