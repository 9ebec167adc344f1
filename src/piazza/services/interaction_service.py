"""Recording likes, dislikes and comments against posts."""
from __future__ import annotations

import logging
from datetime import datetime

from piazza.core.errors import (
    AuthorizationError,
    ExpiredStateError,
    NotFoundError,
    ValidationError,
)
from piazza.domain.lifecycle import evaluate_lifecycle
from piazza.domain.records import InteractionRecord, InteractionType, Principal
from piazza.repositories.base import InteractionStore, PostStore

__all__ = ["create_interaction", "normalize_comment_body"]

logger = logging.getLogger(__name__)


def normalize_comment_body(type: InteractionType, comment_body: str | None) -> str | None:
    """Check that ``comment_body`` matches the interaction type.

    Comments need a non-blank body; likes and dislikes must not carry one.

    Returns:
        The trimmed body for comments, ``None`` for votes.

    Raises:
        ValidationError: If the body is missing for a comment or present for a vote.
    """
    if type is InteractionType.COMMENT:
        body = (comment_body or "").strip()
        if not body:
            raise ValidationError("comment_body is required for comments", field="comment_body")
        return body
    if comment_body is not None:
        raise ValidationError(
            f"comment_body is not allowed for a {type.value}",
            field="comment_body",
        )
    return None


async def create_interaction(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    principal: Principal,
    post_id: int,
    type: InteractionType,
    comment_body: str | None = None,
    now: datetime,
) -> InteractionRecord:
    """Record an interaction by ``principal`` on a live post owned by someone else.

    A like or dislike replaces the user's previous vote on the post.

    Args:
        posts: Store used to look up the target post.
        interactions: Store the interaction is written to.
        principal: Acting user; its name is snapshotted onto the record.
        post_id: Target post.
        type: Like, dislike or comment.
        comment_body: Text of a comment; must be omitted for votes.
        now: Current instant, used to decide whether the post is live.

    Returns:
        The stored interaction.

    Raises:
        ValidationError: If ``comment_body`` does not fit ``type``.
        NotFoundError: If the post does not exist.
        ExpiredStateError: If the post has expired.
        AuthorizationError: If ``principal`` owns the post.
    """
    body = normalize_comment_body(type, comment_body)

    post = await posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if not evaluate_lifecycle(post.expires_at, now).is_live:
        logger.debug("User %s tried to %s expired post %s", principal.id, type.value, post_id)
        raise ExpiredStateError("Cannot interact with expired posts")
    if post.is_owned_by(principal):
        raise AuthorizationError("Users cannot interact with their own posts")

    record = await interactions.record_interaction(
        post_id,
        principal.as_author(),
        type,
        body,
        now=now,
    )
    logger.info("User %s left a %s on post %s", principal.id, type.value, post_id)
    return record
