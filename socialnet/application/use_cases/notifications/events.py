"""Domain notifications emitted by post and follow activity."""

from __future__ import annotations

from socialnet.domain.entities import (
    NOTIFICATION_COMMENT,
    NOTIFICATION_FOLLOW,
    NOTIFICATION_NEW_POST,
    NOTIFICATION_REACTION,
    Notification,
    Post,
    User,
)
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import RealtimePublisher

from .dispatcher import notify


def notify_new_post(
    store: Store,
    *,
    author: User,
    post: Post,
    publisher: RealtimePublisher | None = None,
) -> list[Notification]:
    """Tell every current follower of ``author`` about ``post``."""

    message = f"{author.name} publicó una nueva publicación"
    return [
        notify(
            store,
            user_id=follower_id,
            event_type=NOTIFICATION_NEW_POST,
            message=message,
            payload={"post_id": post.id},
            publisher=publisher,
        )
        for follower_id in sorted(store.follows.list_followers(author.id))
    ]


def notify_post_reaction(
    store: Store,
    *,
    post: Post,
    reactor_id: str,
    reaction: str,
    publisher: RealtimePublisher | None = None,
) -> Notification | None:
    """Tell the post author that someone reacted, unless they reacted themselves."""

    if post.author_id == reactor_id:
        return None
    return notify(
        store,
        user_id=post.author_id,
        event_type=NOTIFICATION_REACTION,
        message="Alguien reaccionó a tu publicación",
        payload={"post_id": post.id, "reaction": reaction},
        publisher=publisher,
    )


def notify_post_comment(
    store: Store,
    *,
    post: Post,
    commenter: User,
    publisher: RealtimePublisher | None = None,
) -> Notification | None:
    """Tell the post author about a new comment, unless they wrote it."""

    if post.author_id == commenter.id:
        return None
    return notify(
        store,
        user_id=post.author_id,
        event_type=NOTIFICATION_COMMENT,
        message=f"{commenter.name} comentó tu publicación",
        payload={"post_id": post.id},
        publisher=publisher,
    )


def notify_new_follower(
    store: Store,
    *,
    follower: User,
    followee_id: str,
    publisher: RealtimePublisher | None = None,
) -> Notification:
    """Tell ``followee_id`` that ``follower`` started following them."""

    return notify(
        store,
        user_id=followee_id,
        event_type=NOTIFICATION_FOLLOW,
        message=f"{follower.name} comenzó a seguirte",
        payload={"follower_id": follower.id},
        publisher=publisher,
    )


__all__ = [
    "notify_new_follower",
    "notify_new_post",
    "notify_post_comment",
    "notify_post_reaction",
]
