"""Use case for publishing a post."""

from __future__ import annotations

from collections.abc import Iterable

from socialnet.config import get_settings
from socialnet.domain.entities import (
    AllSessions,
    AuthorSummary,
    FanoutTarget,
    FollowersOf,
    MediaItem,
    Post,
    PostView,
    empty_reactions,
)
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import RealtimePublisher, serialize_post_view
from socialnet.utils import now_in_app_timezone

from ..notifications import fan_out, notify_new_post

NEW_POST_EVENT = "new_post"


def default_post_broadcast_target(author_id: str) -> FanoutTarget:
    """Return the realtime audience for new posts configured for the process."""

    if get_settings().post_broadcast_policy == "followers":
        return FollowersOf(author_id=author_id)
    return AllSessions()


def normalize_post_content(content: str | None) -> str:
    """Return the trimmed post text or raise when it is blank."""

    text = (content or "").strip()
    if not text:
        raise ValidationError("El contenido de la publicación es obligatorio")
    return text


def create_post(
    store: Store,
    *,
    author_id: str,
    content: str | None,
    media: Iterable[MediaItem] = (),
    publisher: RealtimePublisher | None = None,
    broadcast_target: FanoutTarget | None = None,
) -> PostView:
    """Persist a new post and announce it.

    Every follower of the author receives a stored notification, and the
    post itself is broadcast to the configured realtime audience.
    """

    text = normalize_post_content(content)

    author = store.users.get(author_id)
    if author is None:
        raise NotFoundError("Usuario no encontrado")

    post = store.posts.create(
        Post(
            id=None,
            author_id=author.id,
            content=text,
            media=list(media),
            reactions=empty_reactions(),
            comments=[],
            created_at=now_in_app_timezone(),
        )
    )
    view = PostView(post=post, author=AuthorSummary.from_user(author))

    notify_new_post(store, author=author, post=post, publisher=publisher)
    fan_out(
        store,
        target=broadcast_target or default_post_broadcast_target(author.id),
        event_type=NEW_POST_EVENT,
        payload=serialize_post_view(view),
        publisher=publisher,
    )
    return view


__all__ = [
    "NEW_POST_EVENT",
    "create_post",
    "default_post_broadcast_target",
    "normalize_post_content",
]
