"""Data access helpers for user accounts."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from piazza.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    async def get_by_email(self, email: str) -> User | None:
        """Return a user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_conflicting(self, *, username: str, email: str) -> User | None:
        """Return any user already holding ``username`` or ``email``."""
        result = await self.session.execute(
            select(User).where(or_(User.username == username, User.email == email))
        )
        return result.scalars().first()

    async def create(
        self,
        *,
        username: str,
        name: str,
        email: str,
        password_hash: str,
        now: datetime,
    ) -> User:
        """Insert a new user and return the persisted ORM instance."""
        user = User(
            username=username,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
        )
        self.session.add(user)
        await self.session.flush()
        return user
