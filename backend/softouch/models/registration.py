"""
Registration model: a user's application to attend an event.

Key design decisions:
- Unique constraint on (event_id, user_id): one registration per user per
  event, whatever its status
- `checked_in` is orthogonal to `status` and may only be set once the
  registration is approved (enforced in registration_service)
- Registrations are never deleted
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from softouch.db.base import Base, utcnow


class RegistrationStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=RegistrationStatus.pending.value)
    checked_in = Column(Boolean, nullable=False, default=False)
    contact = Column(String(255), nullable=True)
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    user = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_user_registration"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name="check_registration_status"
        ),
        CheckConstraint(
            "checked_in = false OR status = 'approved'", name="check_checkin_requires_approval"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id}, event={self.event_id}, user={self.user_id}, "
            f"status={self.status}, checked_in={self.checked_in})>"
        )
