"""Shared API dependencies for authentication, stores and the request clock."""

from datetime import datetime
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from piazza.core.errors import AuthError
from piazza.db.session import get_db
from piazza.db.time import utcnow
from piazza.domain.records import Principal
from piazza.repositories import InteractionRepository, PostRepository, UserRepository
from piazza.services import auth_service

# HTTP Bearer scheme for JWT authentication; a missing header is reported as AuthError.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_db)]


def get_now() -> datetime:
    """Return the instant the request is evaluated at."""
    return utcnow()


def get_user_repository(db: SessionDep) -> UserRepository:
    return UserRepository(db)


def get_post_repository(db: SessionDep) -> PostRepository:
    return PostRepository(db)


def get_interaction_repository(db: SessionDep) -> InteractionRepository:
    return InteractionRepository(db)


NowDep = Annotated[datetime, Depends(get_now)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
InteractionRepoDep = Annotated[InteractionRepository, Depends(get_interaction_repository)]


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    users: UserRepoDep,
) -> Principal:
    """Resolve the authenticated principal from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        users: User repository bound to the request session

    Returns:
        Principal for the authenticated user

    Raises:
        AuthError: If the header is missing, the token is invalid or the user is gone
    """
    if credentials is None:
        raise AuthError("Access denied")
    return await auth_service.resolve_principal(users=users, token=credentials.credentials)


# Type alias for current principal dependency
CurrentPrincipalDep = Annotated[Principal, Depends(get_current_principal)]
