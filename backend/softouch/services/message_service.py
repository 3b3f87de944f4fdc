"""
Event chat: an append-only message log per event.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.logging import get_logger
from softouch.models.message import Message
from softouch.services.event_service import get_event

logger = get_logger(__name__)


async def post_message(db: AsyncSession, event_id: int, user_id: int, text: str) -> Message:
    await get_event(db, event_id)

    message = Message(event_id=event_id, user_id=user_id, text=text)
    db.add(message)
    await db.flush()

    logger.info("chat_message_posted", message_id=message.id, event_id=event_id, user_id=user_id)
    result = await db.execute(
        select(Message)
        .where(Message.id == message.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def get_event_messages(db: AsyncSession, event_id: int) -> list[Message]:
    """All messages for an event in the order they were sent."""
    await get_event(db, event_id)

    result = await db.execute(
        select(Message)
        .where(Message.event_id == event_id)
        .order_by(Message.date.asc(), Message.id.asc())
    )
    return list(result.scalars().all())
