# tests/test_queries.py
"""Tests for selecting live, expired and most-active posts."""

from datetime import UTC, datetime, timedelta

from piazza.domain.lifecycle import PostStatus
from piazza.domain.queries import expired_only, live_only, most_active
from piazza.domain.records import Author
from piazza.domain.views import EnrichedPost

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _view(id: int, *, likes: int = 0, dislikes: int = 0, live: bool = True) -> EnrichedPost:
    return EnrichedPost(
        id=id,
        title=f"Post {id}",
        body="Body of the post",
        topics=("sport",),
        owner=Author(id=1, name="Olga Owner"),
        expires_at=NOW + timedelta(minutes=10 if live else -10),
        expires_in=10 if live else 0,
        status=PostStatus.LIVE if live else PostStatus.EXPIRED,
        like_count=likes,
        dislike_count=dislikes,
        comments=(),
        created_at=NOW,
        updated_at=NOW,
    )


def test_live_and_expired_partition() -> None:
    """Live and expired selections split the views and keep their order."""
    views = [_view(1), _view(2, live=False), _view(3), _view(4, live=False)]
    assert [view.id for view in live_only(views)] == [1, 3]
    assert [view.id for view in expired_only(views)] == [2, 4]


def test_most_active_picks_highest_engagement() -> None:
    """A(2+1) beats B(1+1) and C(0)."""
    views = [_view(1, likes=1, dislikes=1), _view(2, likes=2, dislikes=1), _view(3)]
    assert most_active(views).id == 2


def test_most_active_tie_keeps_first_seen() -> None:
    """On equal engagement the earlier post wins."""
    views = [_view(1, likes=3), _view(2, likes=1, dislikes=2), _view(3, dislikes=3)]
    assert most_active(views).id == 1


def test_most_active_ignores_expired_posts() -> None:
    """An expired post cannot be the most active even with more votes."""
    views = [_view(1, likes=10, live=False), _view(2, likes=1)]
    assert most_active(views).id == 2


def test_most_active_without_live_posts() -> None:
    """No live post means no winner."""
    assert most_active([]) is None
    assert most_active([_view(1, likes=4, live=False)]) is None


def test_most_active_with_zero_engagement() -> None:
    """With no votes at all the first live post is returned."""
    assert most_active([_view(5), _view(6)]).id == 5
