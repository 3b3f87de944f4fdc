"""
Reminder endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.reminder import ReminderActionResponse, ReminderCreate, ReminderResponse
from softouch.services import reminder_service

router = APIRouter(prefix="/reminders", tags=["Reminders"])


@router.get("/my", response_model=list[ReminderResponse])
async def my_reminders(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """The current user's reminders, soonest first."""
    return await reminder_service.get_user_reminders(db, user_id)


@router.post("/{event_id}", response_model=ReminderActionResponse, status_code=status.HTTP_201_CREATED)
async def set_reminder(
    event_id: int,
    payload: ReminderCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Set a reminder for an event. One per user per event."""
    reminder = await reminder_service.create_reminder(db, user_id, event_id, payload.reminder_date)
    return ReminderActionResponse(
        message="Reminder set successfully",
        reminder=ReminderResponse.model_validate(reminder),
    )


@router.delete("/{reminder_id}")
async def cancel_reminder(
    reminder_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await reminder_service.delete_reminder(db, reminder_id, user_id)
    return {"message": "Reminder cancelled successfully"}
