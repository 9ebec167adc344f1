"""Selections over enriched posts used by the topic queries."""
from __future__ import annotations

from collections.abc import Iterable
from functools import reduce

from piazza.domain.views import EnrichedPost


def live_only(views: Iterable[EnrichedPost]) -> list[EnrichedPost]:
    """Return the live views, keeping their order."""
    return [view for view in views if view.is_live]


def expired_only(views: Iterable[EnrichedPost]) -> list[EnrichedPost]:
    """Return the expired views, keeping their order."""
    return [view for view in views if not view.is_live]


def _more_active(best: EnrichedPost, candidate: EnrichedPost) -> EnrichedPost:
    # Strictly greater: on a tie the earlier post stays.
    return candidate if candidate.engagement > best.engagement else best


def most_active(views: Iterable[EnrichedPost]) -> EnrichedPost | None:
    """Return the live view with the most likes plus dislikes.

    Views are reduced left to right and the first one seen wins ties.
    Returns ``None`` when no view is live.
    """
    candidates = live_only(views)
    if not candidates:
        return None
    return reduce(_more_active, candidates)
