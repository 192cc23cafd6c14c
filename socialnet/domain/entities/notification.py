"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_NEW_POST = "new_post"
NOTIFICATION_REACTION = "reaction"
NOTIFICATION_COMMENT = "comment"
NOTIFICATION_FOLLOW = "follow"

NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_NEW_POST,
        NOTIFICATION_REACTION,
        NOTIFICATION_COMMENT,
        NOTIFICATION_FOLLOW,
    }
)


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    event_type: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None


__all__ = [
    "NOTIFICATION_COMMENT",
    "NOTIFICATION_FOLLOW",
    "NOTIFICATION_NEW_POST",
    "NOTIFICATION_REACTION",
    "NOTIFICATION_TYPES",
    "Notification",
]
