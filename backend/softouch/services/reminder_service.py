"""
Reminder service: one reminder per user per event.

Reminders are only stored here; dispatching them (and flipping `sent`) is
left to a separate worker that does not exist yet.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from softouch.core.logging import get_logger
from softouch.models.reminder import Reminder
from softouch.services.event_service import get_event

logger = get_logger(__name__)


async def _load_reminder(db: AsyncSession, reminder_id: int) -> Reminder:
    result = await db.execute(
        select(Reminder)
        .where(Reminder.id == reminder_id)
        .execution_options(populate_existing=True)
    )
    reminder = result.scalar_one_or_none()
    if not reminder:
        raise NotFoundError("Reminder not found")
    return reminder


async def _existing_reminder(db: AsyncSession, user_id: int, event_id: int) -> Reminder | None:
    result = await db.execute(
        select(Reminder).where(Reminder.user_id == user_id, Reminder.event_id == event_id)
    )
    return result.scalar_one_or_none()


async def create_reminder(
    db: AsyncSession,
    user_id: int,
    event_id: int,
    reminder_date: datetime,
) -> Reminder:
    await get_event(db, event_id)

    if reminder_date <= datetime.now(timezone.utc):
        raise InvalidInputError("Reminder date must be a future date")

    if await _existing_reminder(db, user_id, event_id):
        raise ConflictError("Reminder already set for this event")

    reminder = Reminder(user_id=user_id, event_id=event_id, reminder_date=reminder_date)
    db.add(reminder)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Reminder already set for this event")

    logger.info("reminder_created", reminder_id=reminder.id, user_id=user_id, event_id=event_id)
    return await _load_reminder(db, reminder.id)


async def get_user_reminders(db: AsyncSession, user_id: int) -> list[Reminder]:
    """A user's reminders, soonest first."""
    result = await db.execute(
        select(Reminder)
        .where(Reminder.user_id == user_id)
        .order_by(Reminder.reminder_date.asc(), Reminder.id.asc())
    )
    return list(result.scalars().all())


async def delete_reminder(db: AsyncSession, reminder_id: int, user_id: int) -> None:
    reminder = await _load_reminder(db, reminder_id)
    if reminder.user_id != user_id:
        raise ForbiddenError("User not authorized")

    await db.delete(reminder)
    await db.flush()
    logger.info("reminder_deleted", reminder_id=reminder_id, user_id=user_id)
