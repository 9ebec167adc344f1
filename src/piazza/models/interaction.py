# src/piazza/models/interaction.py
"""Models capturing likes, dislikes and comments on posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from piazza.db.session import Base
from piazza.db.time import utcnow

VOTE_TYPES_SQL = "type IN ('like', 'dislike')"


class Interaction(Base):
    """One like, dislike or comment left by a user on a post.

    Rows are never updated. A user's vote is replaced by deleting the old row
    and inserting a new one.
    """

    __tablename__ = "interaction"
    __table_args__ = (
        CheckConstraint(
            "type IN ('like', 'dislike', 'comment')",
            name="ck_interaction_type",
        ),
        CheckConstraint(
            "(type = 'comment') = (comment_body IS NOT NULL)",
            name="ck_interaction_comment_body",
        ),
        Index("ix_interaction_post_id", "post_id"),
        # At most one active vote per user per post.
        Index(
            "uq_interaction_vote",
            "post_id",
            "user_id",
            unique=True,
            sqlite_where=text(VOTE_TYPES_SQL),
            postgresql_where=text(VOTE_TYPES_SQL),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )

    # User snapshot taken at creation.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    user_name: Mapped[str] = mapped_column(String(256), nullable=False)

    type: Mapped[str] = mapped_column(String(16), nullable=False)
    comment_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
