"""
Connection model: a networking relationship between two users.

The unique constraint covers the ordered (sender, receiver) pair only; the
swapped pair is checked in connection_service before inserting.
"""

import enum

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from softouch.db.base import Base, TimestampMixin


class ConnectionStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class Connection(Base, TimestampMixin):
    __tablename__ = "connections"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ConnectionStatus.pending.value)

    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")
    receiver = relationship("User", foreign_keys=[receiver_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("sender_id", "receiver_id", name="uq_connection_sender_receiver"),
        CheckConstraint("sender_id <> receiver_id", name="check_connection_not_self"),
        CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')", name="check_connection_status"
        ),
    )

    def other_party(self, user_id: int):
        return self.receiver if self.sender_id == user_id else self.sender

    def __repr__(self) -> str:
        return f"<Connection(id={self.id}, {self.sender_id}->{self.receiver_id}, status={self.status})>"
