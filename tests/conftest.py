# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "piazza-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from piazza.api.v1.dependencies import get_now  # noqa: E402
from piazza.core.security import create_access_token, hash_password  # noqa: E402
from piazza.db.session import create_tables, get_db  # noqa: E402
from piazza.db.time import utcnow  # noqa: E402
from piazza.domain.records import Author, PostRecord  # noqa: E402
from piazza.main import app as fastapi_app  # noqa: E402
from piazza.models import User  # noqa: E402
from piazza.repositories import PostRepository, UserRepository  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "correct-horse"


class FrozenClock:
    """Request clock that only moves when a test advances it."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def advance(self, **delta: float) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest_asyncio.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture()
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def clock() -> FrozenClock:
    """Clock pinned to the current minute so tokens issued in tests stay valid."""
    return FrozenClock(utcnow().replace(second=0, microsecond=0))


@pytest.fixture()
def app(session_factory: async_sessionmaker[AsyncSession], clock: FrozenClock) -> Iterator[FastAPI]:
    async def _get_db_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = _get_db_override
    fastapi_app.dependency_overrides[get_now] = lambda: clock.now
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client


async def _create_user(
    session_factory: async_sessionmaker[AsyncSession],
    username: str,
    name: str,
) -> User:
    async with session_factory() as session:
        user = await UserRepository(session).create(
            username=username,
            name=name,
            email=f"{username}@piazza.io",
            password_hash=hash_password(TEST_PASSWORD),
            now=utcnow(),
        )
        await session.commit()
        return user


@pytest.fixture()
def user_password() -> str:
    """Return the password every fixture user registers with."""
    return TEST_PASSWORD


def _auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest_asyncio.fixture()
async def test_user(session_factory: async_sessionmaker[AsyncSession]) -> User:
    """Create and return the primary persisted user."""
    return await _create_user(session_factory, "olga", "Olga Owner")


@pytest_asyncio.fixture()
async def other_user(session_factory: async_sessionmaker[AsyncSession]) -> User:
    """Create and return a second persisted user."""
    return await _create_user(session_factory, "nick", "Nick Reader")


@pytest_asyncio.fixture()
async def third_user(session_factory: async_sessionmaker[AsyncSession]) -> User:
    """Create and return a third persisted user."""
    return await _create_user(session_factory, "mary", "Mary Voter")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _auth_headers(other_user)


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    """Return authorization headers for the third test user."""
    return _auth_headers(third_user)


MakePost = Callable[..., Awaitable[PostRecord]]


@pytest.fixture()
def make_post(
    session_factory: async_sessionmaker[AsyncSession],
    clock: FrozenClock,
) -> MakePost:
    """Return a factory that stores a post owned by ``owner`` directly."""

    async def _make_post(
        owner: User,
        *,
        title: str = "Test post",
        body: str = "Test post body text",
        topics: tuple[str, ...] = ("tech",),
        expires_in_minutes: float = 60,
    ) -> PostRecord:
        async with session_factory() as session:
            post = await PostRepository(session).insert(
                title=title,
                body=body,
                expires_at=clock.now + timedelta(minutes=expires_in_minutes),
                topics=topics,
                owner=Author(id=owner.id, name=owner.name),
                now=clock.now,
            )
            await session.commit()
            return post

    return _make_post


@pytest_asyncio.fixture()
async def test_post(make_post: MakePost, test_user: User) -> PostRecord:
    """Create a baseline live post owned by ``test_user``."""
    return await make_post(test_user)
