"""Store interfaces the services depend on.

Services only see these protocols and the records from
:mod:`piazza.domain.records`; the SQLAlchemy repositories implement them.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, TypedDict

from piazza.domain.records import Author, InteractionRecord, InteractionType, PostRecord


class PostChanges(TypedDict, total=False):
    """Mutable post fields accepted by :meth:`PostStore.update_by_id`."""

    title: str
    body: str
    topics: Sequence[str]
    expires_at: datetime


class PostStore(Protocol):
    """Persistence operations for posts."""

    async def insert(
        self,
        *,
        title: str,
        body: str,
        expires_at: datetime,
        topics: Sequence[str],
        owner: Author,
        now: datetime,
    ) -> PostRecord: ...

    async def find_by_id(self, post_id: int) -> PostRecord | None: ...

    async def find_all(self) -> list[PostRecord]: ...

    async def find_by_topic(self, topic: str) -> list[PostRecord]: ...

    async def update_by_id(
        self,
        post_id: int,
        changes: PostChanges,
        *,
        now: datetime,
    ) -> PostRecord | None: ...

    async def delete_by_id(self, post_id: int) -> bool: ...


class InteractionStore(Protocol):
    """Persistence operations for likes, dislikes and comments."""

    async def record_interaction(
        self,
        post_id: int,
        user: Author,
        type: InteractionType,
        comment_body: str | None = None,
        *,
        now: datetime,
    ) -> InteractionRecord: ...

    async def list_interactions(self, post_id: int) -> list[InteractionRecord]: ...

    async def list_for_posts(self, post_ids: Sequence[int]) -> list[InteractionRecord]: ...

    async def delete_for_post(self, post_id: int) -> int: ...
