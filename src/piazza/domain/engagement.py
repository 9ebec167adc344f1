"""Folding interaction records into engagement counts."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from piazza.domain.records import InteractionRecord, InteractionType


@dataclass(frozen=True)
class Engagement:
    """Likes, dislikes and comments of one post."""

    like_count: int = 0
    dislike_count: int = 0
    comments: tuple[InteractionRecord, ...] = field(default_factory=tuple)

    @property
    def votes(self) -> int:
        """Total likes plus dislikes; the measure used to rank activity."""
        return self.like_count + self.dislike_count


def aggregate_engagement(interactions: Iterable[InteractionRecord]) -> Engagement:
    """Count votes and collect comments in a single pass.

    Comments keep the order of ``interactions``, which the stores return in
    creation order. Vote uniqueness is the store's job; every vote record
    given here is counted.
    """
    likes = 0
    dislikes = 0
    comments: list[InteractionRecord] = []
    for interaction in interactions:
        if interaction.type is InteractionType.LIKE:
            likes += 1
        elif interaction.type is InteractionType.DISLIKE:
            dislikes += 1
        else:
            comments.append(interaction)
    return Engagement(like_count=likes, dislike_count=dislikes, comments=tuple(comments))
