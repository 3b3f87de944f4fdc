"""
Pydantic schemas for posts, likes and comments.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from softouch.schemas.base import CamelModel
from softouch.schemas.user import UserSummary


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("Text is required")
    return value.strip()


class PostCreate(CamelModel):
    text: str = Field(..., max_length=5000)
    image: Optional[str] = Field(None, max_length=500)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("image")
    @classmethod
    def blank_image_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class CommentCreate(CamelModel):
    text: str = Field(..., max_length=2000)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class LikeResponse(CamelModel):
    id: int
    user_id: int


class CommentResponse(CamelModel):
    id: int
    user_id: int
    user: UserSummary
    text: str
    date: datetime


class PostResponse(CamelModel):
    id: int
    user: UserSummary
    text: str
    image: Optional[str] = None
    date: datetime
    likes: list[LikeResponse] = []
    comments: list[CommentResponse] = []
