# src/piazza/api/v1/endpoints/auth.py
"""Authentication endpoints for the Piazza API."""

from __future__ import annotations

from fastapi import APIRouter, status

from piazza.api.v1.dependencies import NowDep, UserRepoDep
from piazza.models import User
from piazza.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from piazza.services import auth_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    users: UserRepoDep,
    now: NowDep,
) -> User:
    """Create a new account.

    Raises:
        ConflictError: If the username or email is already taken
    """
    return await auth_service.register_user(
        users=users,
        username=payload.username,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        now=now,
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    users: UserRepoDep,
) -> TokenResponse:
    """Exchange an email and password for a bearer token.

    Raises:
        AuthError: If the credentials do not match an account
    """
    token = await auth_service.authenticate(
        users=users,
        email=payload.email,
        password=payload.password,
    )
    return TokenResponse(access_token=token)
