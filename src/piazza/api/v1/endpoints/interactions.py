# src/piazza/api/v1/endpoints/interactions.py
"""Like, dislike and comment endpoints for the Piazza API."""

from fastapi import APIRouter, status

from piazza.api.v1.dependencies import (
    CurrentPrincipalDep,
    InteractionRepoDep,
    NowDep,
    PostRepoDep,
)
from piazza.domain.records import InteractionRecord, InteractionType
from piazza.schemas.interaction import InteractionCreate, InteractionResponse
from piazza.services import interaction_service

router = APIRouter(prefix="/interactions", tags=["interactions"])


@router.post("/", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
async def create_interaction(
    interaction_data: InteractionCreate,
    principal: CurrentPrincipalDep,
    posts: PostRepoDep,
    interactions: InteractionRepoDep,
    now: NowDep,
) -> InteractionRecord:
    """Like, dislike or comment on someone else's live post.

    A like or dislike replaces the caller's previous vote on the post.

    Raises:
        NotFoundError: If the post does not exist
        ExpiredStateError: If the post has expired
        AuthorizationError: If the caller owns the post
    """
    return await interaction_service.create_interaction(
        posts=posts,
        interactions=interactions,
        principal=principal,
        post_id=interaction_data.post_id,
        type=InteractionType(interaction_data.type),
        comment_body=interaction_data.comment_body,
        now=now,
    )
