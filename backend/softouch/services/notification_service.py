"""
Notification service.

SIDE-EFFECT POLICY
==================

Notifications are written by other services after their own change has
been committed. The write is attempted once and is not part of the
triggering transaction:

  1. caller commits its primary change
  2. notify() adds the notification and commits
  3. on a store error notify() rolls back, logs and returns None

A lost notification never undoes a status change. Callers that keep using
ORM objects after notify() must reload them, because a rollback expires
everything in the session.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import NotFoundError
from softouch.core.logging import get_logger
from softouch.core.metrics import record_notification
from softouch.models.notification import Notification, NotificationType

logger = get_logger(__name__)


async def notify(
    db: AsyncSession,
    recipient_id: int,
    notification_type: NotificationType,
    message: str,
    sender_id: Optional[int] = None,
    event_id: Optional[int] = None,
) -> Optional[Notification]:
    """Best-effort write of one notification. Never raises on store errors."""
    try:
        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=notification_type.value,
            message=message,
            event_id=event_id,
        )
        db.add(notification)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        record_notification(notification_type.value, created=False)
        logger.warning(
            "notification_failed",
            recipient_id=recipient_id,
            type=notification_type.value,
            error=str(e),
        )
        return None

    record_notification(notification_type.value, created=True)
    logger.info(
        "notification_created",
        notification_id=notification.id,
        recipient_id=recipient_id,
        type=notification_type.value,
    )
    return notification


async def get_user_notifications(db: AsyncSession, user_id: int) -> list[Notification]:
    """All notifications addressed to a user, newest first."""
    result = await db.execute(
        select(Notification)
        .where(Notification.recipient_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _get_own_notification(db: AsyncSession, notification_id: int, user_id: int) -> Notification:
    result = await db.execute(
        select(Notification)
        .where(
            Notification.id == notification_id,
            Notification.recipient_id == user_id,
        )
        .execution_options(populate_existing=True)
    )
    notification = result.scalar_one_or_none()
    if not notification:
        # Someone else's notification is reported the same way as a missing one
        raise NotFoundError("Notification not found or not authorized")
    return notification


async def mark_read(db: AsyncSession, notification_id: int, user_id: int) -> Notification:
    notification = await _get_own_notification(db, notification_id, user_id)
    notification.read = True
    await db.flush()
    logger.info("notification_read", notification_id=notification_id, user_id=user_id)
    return notification


async def delete_notification(db: AsyncSession, notification_id: int, user_id: int) -> None:
    notification = await _get_own_notification(db, notification_id, user_id)
    await db.delete(notification)
    await db.flush()
    logger.info("notification_deleted", notification_id=notification_id, user_id=user_id)
