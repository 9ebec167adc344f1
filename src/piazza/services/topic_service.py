"""Topic-scoped queries over enriched posts."""
from __future__ import annotations

from datetime import datetime

from piazza.core.errors import NotFoundError
from piazza.domain.queries import expired_only, live_only, most_active
from piazza.domain.topics import Topic, parse_topic
from piazza.domain.views import EnrichedPost, build_post_views
from piazza.repositories.base import InteractionStore, PostStore

__all__ = ["list_live_by_topic", "list_expired_by_topic", "most_active_by_topic"]


async def _topic_views(
    posts: PostStore,
    interactions: InteractionStore,
    topic: Topic,
    now: datetime,
) -> list[EnrichedPost]:
    records = await posts.find_by_topic(topic.value)
    related = await interactions.list_for_posts([post.id for post in records])
    return build_post_views(records, related, now)


async def list_live_by_topic(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    topic: str,
    now: datetime,
) -> list[EnrichedPost]:
    """Return live posts tagged with ``topic``; an empty list when there are none.

    Raises:
        ValidationError: If ``topic`` is not in the vocabulary.
    """
    canonical = parse_topic(topic)
    return live_only(await _topic_views(posts, interactions, canonical, now))


async def list_expired_by_topic(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    topic: str,
    now: datetime,
) -> list[EnrichedPost]:
    """Return expired posts tagged with ``topic``.

    Unlike the live listing, an empty result is reported as not found.

    Raises:
        ValidationError: If ``topic`` is not in the vocabulary.
        NotFoundError: If no post with the topic has expired.
    """
    canonical = parse_topic(topic)
    expired = expired_only(await _topic_views(posts, interactions, canonical, now))
    if not expired:
        raise NotFoundError(f"No expired posts found for topic '{canonical.value}'")
    return expired


async def most_active_by_topic(
    *,
    posts: PostStore,
    interactions: InteractionStore,
    topic: str,
    now: datetime,
) -> EnrichedPost:
    """Return the live post with the most likes plus dislikes for ``topic``.

    Ties go to the earliest post in storage order.

    Raises:
        ValidationError: If ``topic`` is not in the vocabulary.
        NotFoundError: If the topic has no posts or none of them is live.
    """
    canonical = parse_topic(topic)
    views = await _topic_views(posts, interactions, canonical, now)
    if not views:
        raise NotFoundError(f"No posts found for topic '{canonical.value}'")
    winner = most_active(views)
    if winner is None:
        raise NotFoundError(f"No live posts found for topic '{canonical.value}'")
    return winner
