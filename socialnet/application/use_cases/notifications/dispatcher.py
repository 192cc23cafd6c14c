"""Persist notifications and fan events out to realtime sessions."""

from __future__ import annotations

import logging
from typing import Any

from socialnet.domain.entities import (
    AllSessions,
    FanoutTarget,
    FollowersOf,
    Notification,
)
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import (
    RealtimePublisher,
    realtime_publisher,
    serialize_notification,
)
from socialnet.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


def notify(
    store: Store,
    *,
    user_id: str,
    event_type: str,
    message: str,
    payload: dict[str, Any] | None = None,
    publisher: RealtimePublisher | None = None,
) -> Notification:
    """Record a notification for ``user_id`` and push it if they are online.

    The stored record is the source of truth: it is written first and
    unconditionally, the push is a best-effort extra.
    """

    publisher = publisher or realtime_publisher
    notification = Notification(
        id=None,
        user_id=user_id,
        event_type=event_type,
        message=message,
        payload=payload or {},
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    saved = store.notifications.create(notification)

    try:
        publisher.publish_to_user(
            user_id, event_type=NOTIFICATION_EVENT, payload=serialize_notification(saved)
        )
    except Exception as exc:  # push is best-effort; the record is already stored
        logger.debug("Realtime notification push to %s failed: %s", user_id, exc)
    return saved


def resolve_fanout_recipients(store: Store, target: FanoutTarget) -> set[str] | None:
    """Return the user ids addressed by ``target``; ``None`` means everyone."""

    if isinstance(target, AllSessions):
        return None
    if isinstance(target, FollowersOf):
        return store.follows.list_followers(target.author_id)
    raise TypeError(f"Unsupported fan-out target: {target!r}")


def fan_out(
    store: Store,
    *,
    target: FanoutTarget,
    event_type: str,
    payload: Any,
    publisher: RealtimePublisher | None = None,
) -> None:
    """Broadcast a realtime event to the audience selected by ``target``."""

    publisher = publisher or realtime_publisher
    recipients = resolve_fanout_recipients(store, target)
    try:
        publisher.broadcast(event_type=event_type, payload=payload, user_ids=recipients)
    except Exception as exc:  # push is best-effort
        logger.debug("Realtime broadcast of %s failed: %s", event_type, exc)


__all__ = ["NOTIFICATION_EVENT", "fan_out", "notify", "resolve_fanout_recipients"]
