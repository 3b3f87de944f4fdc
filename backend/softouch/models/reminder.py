"""
Reminder model: one per user per event.

`sent` is stored for a future dispatcher; nothing in this service flips it.
"""

from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from softouch.db.base import Base, TimestampMixin


class Reminder(Base, TimestampMixin):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    reminder_date = Column(DateTime(timezone=True), nullable=False)
    sent = Column(Boolean, nullable=False, default=False)

    event = relationship("Event", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_user_event_reminder"),
    )

    def __repr__(self) -> str:
        return f"<Reminder(id={self.id}, user={self.user_id}, event={self.event_id}, at={self.reminder_date})>"
