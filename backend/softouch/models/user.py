"""
User model: credentials plus the public profile.

Profile sections (experience, education, projects) are lists of free-form
entries and live in JSON columns rather than child tables.
"""

from sqlalchemy import Column, Integer, String, Boolean, JSON

from softouch.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Profile
    skills = Column(JSON, nullable=False, default=list)
    location = Column(String(255), nullable=True)
    preferred_categories = Column(JSON, nullable=False, default=list)
    profile_picture = Column(String(500), nullable=True)
    headline = Column(String(255), nullable=True)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
