"""
Pydantic schemas for notifications.
"""

from datetime import datetime
from typing import Optional

from softouch.models.notification import NotificationType
from softouch.schemas.base import CamelModel
from softouch.schemas.user import UserSummary


class NotificationEvent(CamelModel):
    id: int
    title: str


class NotificationResponse(CamelModel):
    id: int
    recipient_id: int
    sender: Optional[UserSummary] = None
    type: NotificationType
    message: str
    event: Optional[NotificationEvent] = None
    read: bool
    created_at: datetime


class NotificationActionResponse(CamelModel):
    message: str
    notification: NotificationResponse
