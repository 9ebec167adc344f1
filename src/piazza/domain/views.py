"""Enriched post views composed from stored records and derived state."""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from piazza.domain.engagement import aggregate_engagement
from piazza.domain.lifecycle import PostStatus, evaluate_lifecycle
from piazza.domain.records import Author, InteractionRecord, PostRecord


@dataclass(frozen=True)
class CommentView:
    """Comment as shown inside an enriched post."""

    id: int
    user: Author
    comment_body: str
    created_at: datetime


@dataclass(frozen=True)
class EnrichedPost:
    """Externally visible post: stored fields plus derived lifecycle and engagement."""

    id: int
    title: str
    body: str
    topics: tuple[str, ...]
    owner: Author
    expires_at: datetime
    expires_in: int
    status: PostStatus
    like_count: int
    dislike_count: int
    comments: tuple[CommentView, ...]
    created_at: datetime
    updated_at: datetime

    @property
    def is_live(self) -> bool:
        return self.status is PostStatus.LIVE

    @property
    def engagement(self) -> int:
        return self.like_count + self.dislike_count


def build_post_view(
    post: PostRecord,
    interactions: Iterable[InteractionRecord],
    now: datetime,
) -> EnrichedPost:
    """Project one post and its interactions into an :class:`EnrichedPost`.

    Interactions that belong to other posts are ignored, which lets callers
    pass a shared batch without pre-filtering.
    """
    lifecycle = evaluate_lifecycle(post.expires_at, now)
    engagement = aggregate_engagement(
        interaction for interaction in interactions if interaction.post_id == post.id
    )
    return EnrichedPost(
        id=post.id,
        title=post.title,
        body=post.body,
        topics=post.topics,
        owner=post.owner,
        expires_at=post.expires_at,
        expires_in=lifecycle.remaining_minutes,
        status=lifecycle.status,
        like_count=engagement.like_count,
        dislike_count=engagement.dislike_count,
        comments=tuple(
            CommentView(
                id=comment.id,
                user=comment.user,
                comment_body=comment.comment_body or "",
                created_at=comment.created_at,
            )
            for comment in engagement.comments
        ),
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def build_post_views(
    posts: Sequence[PostRecord],
    interactions: Iterable[InteractionRecord],
    now: datetime,
) -> list[EnrichedPost]:
    """Build views for a batch of posts, keeping the order of ``posts``.

    Posts and interactions are read in separate queries. An interaction whose
    post was deleted between the two reads has no post to attach to and is
    dropped; a post created in between simply shows no interactions yet.
    """
    by_post: dict[int, list[InteractionRecord]] = defaultdict(list)
    for interaction in interactions:
        by_post[interaction.post_id].append(interaction)
    return [build_post_view(post, by_post.get(post.id, ()), now) for post in posts]
