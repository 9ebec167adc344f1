# tests/services/test_interaction_service.py
from datetime import UTC, datetime, timedelta

import pytest

from piazza.core.errors import AuthorizationError, ExpiredStateError, NotFoundError, ValidationError
from piazza.domain.records import InteractionType, PostRecord, Principal
from piazza.repositories.base import InteractionStore, PostStore
from piazza.services import interaction_service
from piazza.services.interaction_service import normalize_comment_body

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
OWNER = Principal(id=1, name="Olga Owner")
READER = Principal(id=2, name="Nick Reader")


def _record(*, expires_at=NOW + timedelta(minutes=30)):
    return PostRecord(
        id=10,
        title="Stored title",
        body="Stored body text",
        expires_at=expires_at,
        topics=("tech",),
        owner=OWNER.as_author(),
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def posts(mocker):
    return mocker.AsyncMock(spec=PostStore)


@pytest.fixture
def interactions(mocker):
    return mocker.AsyncMock(spec=InteractionStore)


def test_normalize_comment_body() -> None:
    assert normalize_comment_body(InteractionType.COMMENT, "  hello ") == "hello"
    assert normalize_comment_body(InteractionType.LIKE, None) is None
    with pytest.raises(ValidationError):
        normalize_comment_body(InteractionType.COMMENT, "   ")
    with pytest.raises(ValidationError):
        normalize_comment_body(InteractionType.DISLIKE, "nope")


@pytest.mark.asyncio
async def test_shape_is_checked_before_lookup(posts, interactions) -> None:
    with pytest.raises(ValidationError):
        await interaction_service.create_interaction(
            posts=posts, interactions=interactions, principal=READER, post_id=10,
            type=InteractionType.COMMENT, now=NOW,
        )
    posts.find_by_id.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("record", "principal", "error"),
    [
        (None, READER, NotFoundError),
        (_record(expires_at=NOW), READER, ExpiredStateError),
        (_record(expires_at=NOW - timedelta(minutes=1)), OWNER, ExpiredStateError),
        (_record(), OWNER, AuthorizationError),
    ],
)
async def test_preconditions(posts, interactions, record, principal, error) -> None:
    posts.find_by_id.return_value = record
    with pytest.raises(error):
        await interaction_service.create_interaction(
            posts=posts, interactions=interactions, principal=principal, post_id=10,
            type=InteractionType.LIKE, now=NOW,
        )
    interactions.record_interaction.assert_not_awaited()


@pytest.mark.asyncio
async def test_records_with_user_snapshot(posts, interactions) -> None:
    posts.find_by_id.return_value = _record()

    await interaction_service.create_interaction(
        posts=posts, interactions=interactions, principal=READER, post_id=10,
        type=InteractionType.COMMENT, comment_body=" Great read ", now=NOW,
    )

    interactions.record_interaction.assert_awaited_once_with(
        10, READER.as_author(), InteractionType.COMMENT, "Great read", now=NOW,
    )
