# tests/services/test_post_service.py
from datetime import UTC, datetime, timedelta

import pytest

from piazza.core.errors import (
    AuthorizationError,
    ExpiredStateError,
    NotFoundError,
    ValidationError,
)
from piazza.domain.lifecycle import PostStatus
from piazza.domain.records import Author, InteractionRecord, InteractionType, PostRecord, Principal
from piazza.repositories.base import InteractionStore, PostStore
from piazza.services import post_service

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
OWNER = Principal(id=1, name="Olga Owner")
READER = Principal(id=2, name="Nick Reader")


def _record(post_id=10, *, expires_at=NOW + timedelta(minutes=30), topics=("tech",)):
    return PostRecord(
        id=post_id,
        title="Stored title",
        body="Stored body text",
        expires_at=expires_at,
        topics=topics,
        owner=OWNER.as_author(),
        created_at=NOW - timedelta(minutes=5),
        updated_at=NOW - timedelta(minutes=5),
    )


@pytest.fixture
def posts(mocker):
    return mocker.AsyncMock(spec=PostStore)


@pytest.fixture
def interactions(mocker):
    store = mocker.AsyncMock(spec=InteractionStore)
    store.list_interactions.return_value = []
    store.list_for_posts.return_value = []
    return store


@pytest.mark.asyncio
async def test_create_post_stores_canonical_topics_and_expiry(posts) -> None:
    posts.insert.side_effect = lambda **kw: _record(
        expires_at=kw["expires_at"], topics=tuple(kw["topics"])
    )

    view = await post_service.create_post(
        posts=posts,
        principal=OWNER,
        title="Fresh title",
        body="Fresh body text",
        expires_in=45,
        topics=["Health", "tech"],
        now=NOW,
    )

    kwargs = posts.insert.await_args.kwargs
    assert kwargs["expires_at"] == NOW + timedelta(minutes=45)
    assert kwargs["topics"] == ["health", "tech"]
    assert kwargs["owner"] == Author(id=1, name="Olga Owner")
    assert view.status is PostStatus.LIVE
    assert view.expires_in == 45


@pytest.mark.asyncio
@pytest.mark.parametrize("expires_in", [0, -1])
async def test_create_post_rejects_non_positive_lifetime(posts, expires_in) -> None:
    with pytest.raises(ValidationError) as excinfo:
        await post_service.create_post(
            posts=posts,
            principal=OWNER,
            title="Fresh title",
            body="Fresh body text",
            expires_in=expires_in,
            topics=["tech"],
            now=NOW,
        )
    assert excinfo.value.field == "expires_in"
    posts.insert.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_post_counts_interactions(posts, interactions) -> None:
    posts.find_by_id.return_value = _record()
    interactions.list_interactions.return_value = [
        InteractionRecord(1, 10, READER.as_author(), InteractionType.LIKE, None, NOW),
        InteractionRecord(2, 10, READER.as_author(), InteractionType.COMMENT, "Nice", NOW),
    ]

    view = await post_service.get_post(posts=posts, interactions=interactions, post_id=10, now=NOW)

    assert view.like_count == 1
    assert [comment.comment_body for comment in view.comments] == ["Nice"]


@pytest.mark.asyncio
async def test_update_checks_owner_before_expiry(posts, interactions) -> None:
    posts.find_by_id.return_value = _record(expires_at=NOW - timedelta(minutes=1))

    with pytest.raises(AuthorizationError):
        await post_service.update_post(
            posts=posts, interactions=interactions, principal=READER, post_id=10, now=NOW,
            title="New title",
        )
    with pytest.raises(ExpiredStateError):
        await post_service.update_post(
            posts=posts, interactions=interactions, principal=OWNER, post_id=10, now=NOW,
            title="New title",
        )
    posts.update_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_requires_a_change(posts, interactions) -> None:
    posts.find_by_id.return_value = _record()
    with pytest.raises(ValidationError, match="No fields to update"):
        await post_service.update_post(
            posts=posts, interactions=interactions, principal=OWNER, post_id=10, now=NOW,
        )


@pytest.mark.asyncio
async def test_update_of_vanished_post_is_not_found(posts, interactions) -> None:
    posts.find_by_id.return_value = _record()
    posts.update_by_id.return_value = None
    with pytest.raises(NotFoundError):
        await post_service.update_post(
            posts=posts, interactions=interactions, principal=OWNER, post_id=10, now=NOW,
            body="Replacement body",
        )


@pytest.mark.asyncio
async def test_update_resets_expiry_from_now(posts, interactions) -> None:
    posts.find_by_id.return_value = _record()
    posts.update_by_id.return_value = _record(expires_at=NOW + timedelta(minutes=90))

    await post_service.update_post(
        posts=posts, interactions=interactions, principal=OWNER, post_id=10, now=NOW,
        expires_in=90,
    )

    changes = posts.update_by_id.await_args.args[1]
    assert changes == {"expires_at": NOW + timedelta(minutes=90)}


@pytest.mark.asyncio
async def test_delete_removes_interactions_first(posts, interactions) -> None:
    posts.find_by_id.return_value = _record(expires_at=NOW - timedelta(hours=1))
    posts.delete_by_id.return_value = True
    interactions.delete_for_post.return_value = 3

    await post_service.delete_post(
        posts=posts, interactions=interactions, principal=OWNER, post_id=10,
    )

    interactions.delete_for_post.assert_awaited_once_with(10)
    posts.delete_by_id.assert_awaited_once_with(10)


@pytest.mark.asyncio
async def test_list_live_posts_only_loads_live_interactions(posts, interactions) -> None:
    live = _record(1)
    posts.find_all.return_value = [live, _record(2, expires_at=NOW)]

    views = await post_service.list_live_posts(posts=posts, interactions=interactions, now=NOW)

    assert [view.id for view in views] == [1]
    interactions.list_for_posts.assert_awaited_once_with([1])


@pytest.mark.parametrize("expires_in", [float("inf"), float("nan"), 1e12, 1e300])
def test_compute_expiry_rejects_unrepresentable_lifetimes(expires_in) -> None:
    with pytest.raises(ValidationError) as excinfo:
        post_service.compute_expiry(NOW, expires_in)
    assert excinfo.value.field == "expires_in"
