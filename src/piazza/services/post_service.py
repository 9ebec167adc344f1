"""Service-level operations on posts."""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from piazza.core.errors import (
    AuthorizationError,
    ExpiredStateError,
    NotFoundError,
    ValidationError,
)
from piazza.domain.lifecycle import evaluate_lifecycle
from piazza.domain.records import PostRecord, Principal
from piazza.domain.topics import parse_topics
from piazza.domain.views import EnrichedPost, build_post_view, build_post_views
from piazza.repositories.base import InteractionStore, PostChanges, PostStore

__all__ = [
    "create_post",
    "get_post",
    "list_live_posts",
    "update_post",
    "delete_post",
    "compute_expiry",
]

logger = logging.getLogger(__name__)


def compute_expiry(now: datetime, expires_in: float) -> datetime:
    """Return the instant ``expires_in`` minutes after ``now``.

    Raises:
        ValidationError: If ``expires_in`` is not a positive, finite number of
            minutes or lands past the largest representable instant.
    """
    if not math.isfinite(expires_in) or expires_in <= 0:
        raise ValidationError(
            "expires_in must be a positive number of minutes",
            field="expires_in",
        )
    try:
        return now + timedelta(minutes=expires_in)
    except OverflowError as err:
        raise ValidationError("expires_in is too large", field="expires_in") from err


async def _load_post(posts: PostStore, post_id: int) -> PostRecord:
    post = await posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _ensure_owner(post: PostRecord, principal: Principal, action: str) -> None:
    if not post.is_owned_by(principal):
        logger.debug("User %s may not %s post %s", principal.id, action, post.id)
        raise AuthorizationError(f"You can only {action} your own posts")


async def create_post(
    *,
    posts: PostStore,
    principal: Principal,
    title: str,
    body: str,
    expires_in: float,
    topics: Sequence[str],
    now: datetime,
) -> EnrichedPost:
    """Create a post owned by ``principal`` that stays live for ``expires_in`` minutes.

    Args:
        posts: Store used to persist the post.
        principal: Authenticated author; its name is snapshotted onto the post.
        title: Post title.
        body: Post body.
        expires_in: Lifetime in minutes, counted from ``now``.
        topics: Topic names; matched case-insensitively.
        now: Current instant.

    Returns:
        The enriched view of the new post.

    Raises:
        ValidationError: If a topic is unknown or repeated, or ``expires_in``
            is not positive.
    """
    canonical = parse_topics(topics)
    post = await posts.insert(
        title=title,
        body=body,
        expires_at=compute_expiry(now, expires_in),
        topics=[topic.value for topic in canonical],
        owner=principal.as_author(),
        now=now,
    )
    logger.info("User %s created post %s expiring at %s", principal.id, post.id, post.expires_at)
    return build_post_view(post, (), now)


async def get_post(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    post_id: int,
    now: datetime,
) -> EnrichedPost:
    """Return the enriched view of one post.

    Raises:
        NotFoundError: If the post does not exist.
    """
    post = await _load_post(posts, post_id)
    return build_post_view(post, await interactions.list_interactions(post.id), now)


async def list_live_posts(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    now: datetime,
) -> list[EnrichedPost]:
    """Return every live post in storage order; empty when none are live."""
    records = [
        post
        for post in await posts.find_all()
        if evaluate_lifecycle(post.expires_at, now).is_live
    ]
    related = await interactions.list_for_posts([post.id for post in records])
    return build_post_views(records, related, now)


async def update_post(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    principal: Principal,
    post_id: int,
    now: datetime,
    title: str | None = None,
    body: str | None = None,
    topics: Sequence[str] | None = None,
    expires_in: float | None = None,
) -> EnrichedPost:
    """Apply an owner's partial update to a live post.

    A new ``expires_in`` restarts the lifetime from ``now``.

    Raises:
        NotFoundError: If the post does not exist.
        AuthorizationError: If ``principal`` does not own the post.
        ExpiredStateError: If the post has already expired.
        ValidationError: If no field is given or a field is invalid.
    """
    post = await _load_post(posts, post_id)
    _ensure_owner(post, principal, "update")
    if not evaluate_lifecycle(post.expires_at, now).is_live:
        raise ExpiredStateError("Expired posts cannot be updated")

    changes: PostChanges = {}
    if title is not None:
        changes["title"] = title
    if body is not None:
        changes["body"] = body
    if topics is not None:
        changes["topics"] = [topic.value for topic in parse_topics(topics)]
    if expires_in is not None:
        changes["expires_at"] = compute_expiry(now, expires_in)
    if not changes:
        raise ValidationError("No fields to update")

    updated = await posts.update_by_id(post_id, changes, now=now)
    if updated is None:
        raise NotFoundError("Post not found")
    logger.info("User %s updated post %s (%s)", principal.id, post_id, ", ".join(sorted(changes)))
    return build_post_view(updated, await interactions.list_interactions(post_id), now)


async def delete_post(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    principal: Principal,
    post_id: int,
) -> None:
    """Delete a post and its interactions on behalf of its owner.

    Expired posts may still be deleted.

    Raises:
        NotFoundError: If the post does not exist.
        AuthorizationError: If ``principal`` does not own the post.
    """
    post = await _load_post(posts, post_id)
    _ensure_owner(post, principal, "delete")
    removed = await interactions.delete_for_post(post_id)
    if not await posts.delete_by_id(post_id):
        raise NotFoundError("Post not found")
    logger.info("User %s deleted post %s and %d interactions", principal.id, post_id, removed)
