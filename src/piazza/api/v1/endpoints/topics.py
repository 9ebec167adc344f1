# src/piazza/api/v1/endpoints/topics.py
"""Topic-scoped post queries for the Piazza API."""

from fastapi import APIRouter

from piazza.api.v1.dependencies import (
    CurrentPrincipalDep,
    InteractionRepoDep,
    NowDep,
    PostRepoDep,
)
from piazza.domain.views import EnrichedPost
from piazza.schemas.post import PostResponse
from piazza.services import topic_service

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get("/{topic}/live", response_model=list[PostResponse])
async def list_live_by_topic(
    topic: str,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> list[EnrichedPost]:
    """List live posts for a topic; an empty list when there are none."""
    return await topic_service.list_live_by_topic(
        posts=posts,
        interactions=interactions,
        topic=topic,
        now=now,
    )


@router.get("/{topic}/expired", response_model=list[PostResponse])
async def list_expired_by_topic(
    topic: str,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> list[EnrichedPost]:
    """List expired posts for a topic.

    Raises:
        NotFoundError: If no post with the topic has expired
    """
    return await topic_service.list_expired_by_topic(
        posts=posts,
        interactions=interactions,
        topic=topic,
        now=now,
    )


@router.get("/{topic}/most-active", response_model=PostResponse)
async def most_active_by_topic(
    topic: str,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> EnrichedPost:
    """Return the live post with the most likes plus dislikes for a topic.

    Raises:
        NotFoundError: If the topic has no live posts
    """
    return await topic_service.most_active_by_topic(
        posts=posts,
        interactions=interactions,
        topic=topic,
        now=now,
    )
