"""
Notification model. Rows are only ever written as side effects of other
mutations; afterwards the recipient may mark them read or delete them.
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from softouch.db.base import Base, utcnow


class NotificationType(str, enum.Enum):
    event_update = "event_update"
    registration_status = "registration_status"
    new_event_interest = "new_event_interest"
    connection_request = "connection_request"
    connection_accepted = "connection_accepted"
    post_mention = "post_mention"
    comment_on_post = "comment_on_post"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    type = Column(String(40), nullable=False)
    message = Column(String(1000), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")
    event = relationship("Event", lazy="selectin")

    __table_args__ = (
        Index("ix_notifications_recipient_created", "recipient_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, to={self.recipient_id}, type={self.type}, read={self.read})>"
