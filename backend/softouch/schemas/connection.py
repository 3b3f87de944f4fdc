"""
Pydantic schemas for the connection workflow.
"""

from datetime import datetime

from softouch.models.connection import ConnectionStatus
from softouch.schemas.base import CamelModel
from softouch.schemas.user import UserSummary


class ConnectionResponse(CamelModel):
    id: int
    sender_id: int
    receiver_id: int
    sender: UserSummary
    receiver: UserSummary
    status: ConnectionStatus
    created_at: datetime
    updated_at: datetime


class ConnectionActionResponse(CamelModel):
    message: str
    connection: ConnectionResponse
