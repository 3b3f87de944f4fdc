"""
Event model. Each event owns an ordered list of registrations.

Key design decisions:
- `created_by_id` is set once at creation and never updated
- Skill and category tags are small string lists kept in JSON columns;
  set-matching filters on them run in the service layer
- Index on `date` for range filters and the default date-descending sort
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship

from softouch.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    organizer = Column(String(255), nullable=False)
    organizer_email = Column(String(255), nullable=False)
    event_image = Column(String(500), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=False)
    skills_required = Column(JSON, nullable=False, default=list)
    categories = Column(JSON, nullable=False, default=list)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    created_by = relationship("User", lazy="selectin")
    registrations = relationship(
        "Registration",
        lazy="selectin",
        order_by="[Registration.registered_at, Registration.id]",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_events_date", "date"),
    )

    @property
    def registration_count(self) -> int:
        return len(self.registrations)

    def find_registration(self, registration_id: int):
        return next((r for r in self.registrations if r.id == registration_id), None)

    def registration_for(self, user_id: int):
        return next((r for r in self.registrations if r.user_id == user_id), None)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, registrations={len(self.registrations)})>"
