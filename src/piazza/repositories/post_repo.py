"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from piazza.db.time import as_utc
from piazza.domain.records import Author, PostRecord
from piazza.models.post import Post, PostTopic
from piazza.repositories.base import PostChanges

__all__ = ["PostRepository", "to_post_record"]


def to_post_record(post: Post) -> PostRecord:
    """Convert a Post ORM instance to a plain record."""
    return PostRecord(
        id=post.id,
        title=post.title,
        body=post.body,
        expires_at=as_utc(post.expires_at),
        topics=post.topics,
        owner=Author(id=post.owner_id, name=post.owner_name),
        created_at=as_utc(post.created_at),
        updated_at=as_utc(post.updated_at),
    )


def _topic_rows(topics: Sequence[str]) -> list[PostTopic]:
    return [PostTopic(topic=topic, position=index) for index, topic in enumerate(topics)]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    async def _get(self, post_id: int) -> Post | None:
        result = await self.session.execute(select(Post).where(Post.id == post_id))
        return result.scalars().first()

    async def insert(
        self,
        *,
        title: str,
        body: str,
        expires_at: datetime,
        topics: Sequence[str],
        owner: Author,
        now: datetime,
    ) -> PostRecord:
        """Insert a new post and return it with its assigned id.

        Args:
            title: Post title.
            body: Post body.
            expires_at: Absolute instant the post stops being live.
            topics: Canonical topic names, already validated.
            owner: Author snapshot stored with the post.
            now: Creation instant.
        """
        post = Post(
            title=title,
            body=body,
            expires_at=expires_at,
            owner_id=owner.id,
            owner_name=owner.name,
            created_at=now,
            updated_at=now,
            topic_rows=_topic_rows(topics),
        )
        self.session.add(post)
        await self.session.flush()
        return to_post_record(post)

    async def find_by_id(self, post_id: int) -> PostRecord | None:
        """Return a post by identifier."""
        post = await self._get(post_id)
        return to_post_record(post) if post is not None else None

    async def find_all(self) -> list[PostRecord]:
        """Return every post in storage order."""
        result = await self.session.execute(select(Post).order_by(Post.id))
        return [to_post_record(post) for post in result.scalars()]

    async def find_by_topic(self, topic: str) -> list[PostRecord]:
        """Return posts tagged with ``topic`` in storage order."""
        result = await self.session.execute(
            select(Post)
            .join(PostTopic, PostTopic.post_id == Post.id)
            .where(PostTopic.topic == topic)
            .order_by(Post.id)
        )
        return [to_post_record(post) for post in result.scalars()]

    async def update_by_id(
        self,
        post_id: int,
        changes: PostChanges,
        *,
        now: datetime,
    ) -> PostRecord | None:
        """Apply ``changes`` to a post and return the updated record."""
        post = await self._get(post_id)
        if post is None:
            return None

        if "title" in changes:
            post.title = changes["title"]
        if "body" in changes:
            post.body = changes["body"]
        if "expires_at" in changes:
            post.expires_at = changes["expires_at"]
        if "topics" in changes:
            # Flush the removals first so re-added topics do not collide on the key.
            post.topic_rows.clear()
            await self.session.flush()
            post.topic_rows.extend(_topic_rows(changes["topics"]))
        post.updated_at = now

        await self.session.flush()
        return to_post_record(post)

    async def delete_by_id(self, post_id: int) -> bool:
        """Delete a post and its topic rows; return whether it existed."""
        post = await self._get(post_id)
        if post is None:
            return False
        await self.session.delete(post)
        await self.session.flush()
        return True
