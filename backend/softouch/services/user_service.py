"""
User profile lookups and updates.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import NotFoundError
from softouch.core.logging import get_logger
from softouch.models.user import User
from softouch.schemas.user import ProfileUpdate

logger = get_logger(__name__)

LIST_FIELDS = {"skills", "preferred_categories", "experience", "education", "projects"}


async def get_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User not found")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).where(User.is_active.is_(True)).order_by(User.name))
    return list(result.scalars().all())


async def update_profile(db: AsyncSession, user_id: int, profile: ProfileUpdate) -> User:
    """Partial update: only fields present in the request body change."""
    user = await get_user(db, user_id)
    changes = profile.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None:
            if field == "name":
                continue
            if field in LIST_FIELDS:
                value = []
        setattr(user, field, value)
    await db.flush()
    await db.refresh(user)
    logger.info("profile_updated", user_id=user_id, fields=sorted(changes))
    return user
