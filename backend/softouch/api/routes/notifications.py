"""
Notification endpoints. Users only ever see their own notifications.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.notification import NotificationActionResponse, NotificationResponse
from softouch.services import notification_service

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/my", response_model=list[NotificationResponse])
async def my_notifications(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await notification_service.get_user_notifications(db, user_id)


@router.put("/{notification_id}/read", response_model=NotificationActionResponse)
async def mark_notification_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    notification = await notification_service.mark_read(db, notification_id, user_id)
    return NotificationActionResponse(
        message="Notification marked as read",
        notification=NotificationResponse.model_validate(notification),
    )


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await notification_service.delete_notification(db, notification_id, user_id)
    return {"message": "Notification deleted"}
