"""
Post feed endpoints: posts, likes and comments.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.post import CommentCreate, CommentResponse, LikeResponse, PostCreate, PostResponse
from softouch.services import post_service

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.create_post(db, user_id, payload.text, payload.image)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """All posts, newest first."""
    return await post_service.list_posts(db)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.get_post(db, post_id)


@router.put("/like/{post_id}", response_model=list[LikeResponse])
async def like_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Like a post. Returns the post's updated likes."""
    return await post_service.like_post(db, post_id, user_id)


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
async def unlike_post(
    post_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove the current user's like. Returns the post's updated likes."""
    return await post_service.unlike_post(db, post_id, user_id)


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
async def comment_on_post(
    post_id: int,
    payload: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Add a comment. Returns the post's updated comments."""
    return await post_service.add_comment(db, post_id, user_id, payload.text)
