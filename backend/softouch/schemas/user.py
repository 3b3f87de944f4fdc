"""
Pydantic schemas for user accounts and profiles.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import EmailStr, Field, field_validator

from softouch.schemas.base import CamelModel, split_tags


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    skills: Optional[list[str]] = None
    location: Optional[str] = Field(None, max_length=255)
    preferred_categories: Optional[list[str]] = None
    profile_picture: Optional[str] = Field(None, max_length=500)
    headline: Optional[str] = Field(None, max_length=255)
    experience: Optional[list[dict[str, Any]]] = None
    education: Optional[list[dict[str, Any]]] = None
    projects: Optional[list[dict[str, Any]]] = None

    @field_validator("skills", "preferred_categories", mode="before")
    @classmethod
    def split_tag_list(cls, value):
        return None if value is None else split_tags(value)


class UserSummary(CamelModel):
    """Identity as embedded in events, posts, connections and messages."""

    id: int
    name: str
    email: str
    profile_picture: Optional[str] = None
    headline: Optional[str] = None


class UserResponse(UserSummary):
    is_active: bool
    skills: list[str] = []
    location: Optional[str] = None
    preferred_categories: list[str] = []
    experience: list[dict[str, Any]] = []
    education: list[dict[str, Any]] = []
    projects: list[dict[str, Any]] = []
    created_at: datetime


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
