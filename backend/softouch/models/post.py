"""
Post model with its likes and comments.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from softouch.db.base import Base, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    image = Column(String(500), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    user = relationship("User", lazy="selectin")
    likes = relationship(
        "PostLike", lazy="selectin", order_by="PostLike.id", cascade="all, delete-orphan"
    )
    comments = relationship(
        "PostComment", lazy="selectin", order_by="PostComment.id", cascade="all, delete-orphan"
    )

    def is_liked_by(self, user_id: int) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user={self.user_id}, likes={len(self.likes)})>"


class PostLike(Base):
    __tablename__ = "post_likes"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_post_like_user"),
    )


class PostComment(Base):
    __tablename__ = "post_comments"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", lazy="selectin")
