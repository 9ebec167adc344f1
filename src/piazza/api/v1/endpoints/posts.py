# src/piazza/api/v1/endpoints/posts.py
"""Post-related endpoints for the Piazza API."""

from fastapi import APIRouter, status

from piazza.api.v1.dependencies import (
    CurrentPrincipalDep,
    InteractionRepoDep,
    NowDep,
    PostRepoDep,
)
from piazza.domain.views import EnrichedPost
from piazza.schemas.common import MessageResponse
from piazza.schemas.post import PostCreate, PostResponse, PostUpdate
from piazza.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    now: NowDep,
) -> EnrichedPost:
    """Create a new post owned by the caller.

    Args:
        post_data: Title, body, lifetime in minutes and topics
        principal: Authenticated author
        posts: Post repository
        now: Request instant

    Returns:
        The new post with its derived status and empty engagement
    """
    return await post_service.create_post(
        posts=posts,
        principal=principal,
        title=post_data.title,
        body=post_data.body,
        expires_in=post_data.expires_in,
        topics=post_data.topics,
        now=now,
    )


@router.get("/", response_model=list[PostResponse])
async def list_live_posts(
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> list[EnrichedPost]:
    """List every live post in storage order."""
    return await post_service.list_live_posts(posts=posts, interactions=interactions, now=now)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> EnrichedPost:
    """Get a specific post, live or expired, with its engagement.

    Raises:
        NotFoundError: If the post does not exist
    """
    return await post_service.get_post(
        posts=posts,
        interactions=interactions,
        post_id=post_id,
        now=now,
    )


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    changes: PostUpdate,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> EnrichedPost:
    """Update the caller's own live post.

    Args:
        post_id: ID of the post to update
        changes: Fields to change; omitted fields are kept
        principal: Authenticated user (must be the owner)
        posts: Post repository
        interactions: Interaction repository
        now: Request instant

    Raises:
        NotFoundError: If the post does not exist
        AuthorizationError: If the caller is not the owner
        ExpiredStateError: If the post has expired
    """
    return await post_service.update_post(
        posts=posts,
        interactions=interactions,
        principal=principal,
        post_id=post_id,
        now=now,
        title=changes.title,
        body=changes.body,
        topics=changes.topics,
        expires_in=changes.expires_in,
    )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
) -> MessageResponse:
    """Delete the caller's own post together with its interactions.

    Raises:
        NotFoundError: If the post does not exist
        AuthorizationError: If the caller is not the owner
    """
    await post_service.delete_post(
        posts=posts,
        interactions=interactions,
        principal=principal,
        post_id=post_id,
    )
    return MessageResponse(message="Post deleted")
