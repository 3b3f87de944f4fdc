"""
Event chat endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.message import MessageCreate, MessageResponse
from softouch.services import message_service

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("/{event_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    event_id: int,
    payload: MessageCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await message_service.post_message(db, event_id, user_id, payload.text)


@router.get("/{event_id}", response_model=list[MessageResponse])
async def list_messages(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Chat history for an event, oldest first."""
    return await message_service.get_event_messages(db, event_id)
