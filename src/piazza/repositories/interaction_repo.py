"""Data access helpers for likes, dislikes and comments."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from piazza.core.errors import ConflictError
from piazza.db.time import as_utc
from piazza.domain.records import Author, InteractionRecord, InteractionType
from piazza.models.interaction import Interaction

__all__ = ["InteractionRepository", "to_interaction_record"]

logger = logging.getLogger(__name__)

VOTE_TYPES = (InteractionType.LIKE.value, InteractionType.DISLIKE.value)


def to_interaction_record(interaction: Interaction) -> InteractionRecord:
    """Convert an Interaction ORM instance to a plain record."""
    return InteractionRecord(
        id=interaction.id,
        post_id=interaction.post_id,
        user=Author(id=interaction.user_id, name=interaction.user_name),
        type=InteractionType(interaction.type),
        comment_body=interaction.comment_body,
        created_at=as_utc(interaction.created_at),
    )


class InteractionRepository:
    """Thin wrapper around database access for interaction records."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    async def record_interaction(
        self,
        post_id: int,
        user: Author,
        type: InteractionType,
        comment_body: str | None = None,
        *,
        now: datetime,
    ) -> InteractionRecord:
        """Persist an interaction, replacing the user's previous vote if any.

        Votes are last-write-wins: the user's existing like or dislike on the
        post is deleted and the new one inserted in the same transaction.
        Comments are always appended.

        Raises:
            ConflictError: If a concurrent request inserted a vote for the
                same user and post first.
        """
        if type.is_vote:
            result = await self.session.execute(
                delete(Interaction).where(
                    Interaction.post_id == post_id,
                    Interaction.user_id == user.id,
                    Interaction.type.in_(VOTE_TYPES),
                )
            )
            if result.rowcount:
                logger.info(
                    "Replacing vote of user %s on post %s with %s",
                    user.id,
                    post_id,
                    type.value,
                )

        interaction = Interaction(
            post_id=post_id,
            user_id=user.id,
            user_name=user.name,
            type=type.value,
            comment_body=comment_body,
            created_at=now,
        )
        self.session.add(interaction)
        try:
            await self.session.flush()
        except IntegrityError as err:
            logger.warning("Concurrent vote by user %s on post %s rejected", user.id, post_id)
            raise ConflictError("A vote for this post was recorded concurrently") from err
        return to_interaction_record(interaction)

    async def list_interactions(self, post_id: int) -> list[InteractionRecord]:
        """Return a post's interactions in creation order."""
        result = await self.session.execute(
            select(Interaction)
            .where(Interaction.post_id == post_id)
            .order_by(Interaction.id)
        )
        return [to_interaction_record(row) for row in result.scalars()]

    async def list_for_posts(self, post_ids: Sequence[int]) -> list[InteractionRecord]:
        """Return interactions for several posts in creation order."""
        if not post_ids:
            return []
        result = await self.session.execute(
            select(Interaction)
            .where(Interaction.post_id.in_(list(post_ids)))
            .order_by(Interaction.id)
        )
        return [to_interaction_record(row) for row in result.scalars()]

    async def delete_for_post(self, post_id: int) -> int:
        """Remove every interaction on a post; return how many were removed."""
        result = await self.session.execute(
            delete(Interaction).where(Interaction.post_id == post_id)
        )
        return result.rowcount or 0
