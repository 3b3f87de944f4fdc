"""
Posts with likes and comments.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import ConflictError, NotFoundError
from softouch.core.logging import get_logger
from softouch.models.notification import NotificationType
from softouch.models.post import Post, PostComment, PostLike
from softouch.services import notification_service
from softouch.services.user_service import get_user

logger = get_logger(__name__)


async def get_post(db: AsyncSession, post_id: int) -> Post:
    result = await db.execute(
        select(Post)
        .where(Post.id == post_id)
        .execution_options(populate_existing=True)
    )
    post = result.scalar_one_or_none()
    if not post:
        raise NotFoundError("Post not found")
    return post


async def create_post(db: AsyncSession, user_id: int, text: str, image: Optional[str] = None) -> Post:
    post = Post(user_id=user_id, text=text, image=image)
    db.add(post)
    await db.flush()
    logger.info("post_created", post_id=post.id, user_id=user_id)
    return await get_post(db, post.id)


async def list_posts(db: AsyncSession) -> list[Post]:
    """All posts, newest first."""
    result = await db.execute(select(Post).order_by(Post.date.desc(), Post.id.desc()))
    return list(result.scalars().all())


async def like_post(db: AsyncSession, post_id: int, user_id: int) -> list[PostLike]:
    post = await get_post(db, post_id)
    if post.is_liked_by(user_id):
        raise ConflictError("Post already liked")

    post.likes.append(PostLike(user_id=user_id))
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Post already liked")
    logger.info("post_liked", post_id=post_id, user_id=user_id)
    return (await get_post(db, post_id)).likes


async def unlike_post(db: AsyncSession, post_id: int, user_id: int) -> list[PostLike]:
    post = await get_post(db, post_id)
    like = next((like for like in post.likes if like.user_id == user_id), None)
    if like is None:
        raise ConflictError("Post has not yet been liked")

    post.likes.remove(like)
    await db.flush()
    logger.info("post_unliked", post_id=post_id, user_id=user_id)
    return (await get_post(db, post_id)).likes


async def add_comment(db: AsyncSession, post_id: int, user_id: int, text: str) -> list[PostComment]:
    """Append a comment; the post's author hears about it unless they wrote it."""
    post = await get_post(db, post_id)
    author_id = post.user_id

    post.comments.append(PostComment(user_id=user_id, text=text))
    await db.commit()
    logger.info("post_commented", post_id=post_id, user_id=user_id)

    if author_id != user_id:
        commenter = await get_user(db, user_id)
        await notification_service.notify(
            db,
            recipient_id=author_id,
            notification_type=NotificationType.comment_on_post,
            message=f"{commenter.name} commented on your post.",
            sender_id=user_id,
        )
    return (await get_post(db, post_id)).comments
