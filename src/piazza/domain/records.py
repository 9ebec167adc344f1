"""Plain data records passed between the stores and the domain logic.

The repositories translate ORM rows into these frozen dataclasses so nothing
above the persistence layer depends on SQLAlchemy.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InteractionType(str, Enum):
    """Kinds of interaction a user can leave on a post."""

    LIKE = "like"
    DISLIKE = "dislike"
    COMMENT = "comment"

    @property
    def is_vote(self) -> bool:
        return self is not InteractionType.COMMENT


@dataclass(frozen=True)
class Author:
    """User reference with the display name captured at write time."""

    id: int
    name: str


@dataclass(frozen=True)
class Principal:
    """Authenticated identity resolved from a request credential."""

    id: int
    name: str

    def as_author(self) -> Author:
        return Author(id=self.id, name=self.name)


@dataclass(frozen=True)
class PostRecord:
    """Stored state of a post."""

    id: int
    title: str
    body: str
    expires_at: datetime
    topics: tuple[str, ...]
    owner: Author
    created_at: datetime
    updated_at: datetime

    def is_owned_by(self, principal: Principal) -> bool:
        return self.owner.id == principal.id


@dataclass(frozen=True)
class InteractionRecord:
    """Stored like, dislike or comment."""

    id: int
    post_id: int
    user: Author
    type: InteractionType
    comment_body: str | None
    created_at: datetime
