"""
Event chat message. Append-only, scoped to one event.
"""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from softouch.db.base import Base, utcnow


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("ix_messages_event_date", "event_id", "date"),
    )
