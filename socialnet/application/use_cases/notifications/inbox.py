"""Read side of a user's notifications."""

from __future__ import annotations

from collections.abc import Sequence

from socialnet.domain.entities import Notification
from socialnet.domain.exceptions import ValidationError
from socialnet.domain.repositories import Store

DEFAULT_NOTIFICATION_LIMIT = 50


def list_notifications(
    store: Store, user_id: str, *, limit: int = DEFAULT_NOTIFICATION_LIMIT
) -> Sequence[Notification]:
    """Return the newest notifications of ``user_id``, at most ``limit``."""

    if limit < 1:
        raise ValidationError("El límite debe ser mayor que cero")
    return store.notifications.list_for_user(user_id, limit=limit)


def mark_all_read(store: Store, user_id: str) -> int:
    """Mark every unread notification of ``user_id`` as read."""

    return store.notifications.mark_all_read(user_id)


__all__ = ["DEFAULT_NOTIFICATION_LIMIT", "list_notifications", "mark_all_read"]
