"""Domain entity for follow relationships."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

FOLLOW_STATUS_FOLLOWED = "followed"
FOLLOW_STATUS_UNFOLLOWED = "unfollowed"


@dataclass(frozen=True)
class FollowEdge:
    """``follower_id`` follows ``followee_id``."""

    follower_id: str
    followee_id: str
    created_at: datetime | None = None


__all__ = ["FOLLOW_STATUS_FOLLOWED", "FOLLOW_STATUS_UNFOLLOWED", "FollowEdge"]
