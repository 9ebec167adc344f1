# src/piazza/models/post.py
"""SQLAlchemy models for posts and their topic tags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from piazza.db.session import Base
from piazza.db.time import utcnow


class Post(Base):
    """Time-limited post authored by a user.

    Only the expiry instant is stored. Whether a post is live, and how many
    minutes it has left, is derived on every read.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Owner snapshot taken at creation; never refreshed from user_account.
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    owner_name: Mapped[str] = mapped_column(String(256), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    topic_rows: Mapped[list[PostTopic]] = relationship(
        "PostTopic",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTopic.position",
        lazy="selectin",
    )

    @property
    def topics(self) -> tuple[str, ...]:
        """Return the post's topics in the order they were supplied."""
        return tuple(row.topic for row in self.topic_rows)


class PostTopic(Base):
    """Membership of a post in one topic of the fixed vocabulary."""

    __tablename__ = "post_topic"
    __table_args__ = (Index("ix_post_topic_topic", "topic"),)

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Composite primary key keeps a topic from being attached twice.
    topic: Mapped[str] = mapped_column(String(32), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    post: Mapped[Post] = relationship("Post", back_populates="topic_rows")
