"""Live/expired evaluation of a post's expiry instant."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from piazza.domain.clock import as_utc

SECONDS_PER_MINUTE = 60


class PostStatus(str, Enum):
    """Derived state of a post; never persisted."""

    LIVE = "live"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Lifecycle:
    """Status and whole minutes left, rounded up, for one post at one instant."""

    status: PostStatus
    remaining_minutes: int

    @property
    def is_live(self) -> bool:
        return self.status is PostStatus.LIVE


def evaluate_lifecycle(expires_at: datetime, now: datetime) -> Lifecycle:
    """Compute a post's status and remaining minutes at ``now``.

    A post is expired from the instant ``now`` reaches ``expires_at``. The
    remaining time is rounded up to whole minutes and never negative, so a
    post with 30 seconds left reports one minute.
    """
    remaining = (as_utc(expires_at) - as_utc(now)).total_seconds()
    if remaining <= 0:
        return Lifecycle(status=PostStatus.EXPIRED, remaining_minutes=0)
    return Lifecycle(
        status=PostStatus.LIVE,
        remaining_minutes=max(0, math.ceil(remaining / SECONDS_PER_MINUTE)),
    )
