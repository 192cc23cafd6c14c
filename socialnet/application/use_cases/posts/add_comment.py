"""Use case for commenting on a post."""

from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

from socialnet.domain.entities import AllSessions, Comment
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import RealtimePublisher, serialize_comment
from socialnet.utils import now_in_app_timezone

from ..notifications import fan_out, notify_post_comment

NEW_COMMENT_EVENT = "new_comment"


def add_comment(
    store: Store,
    *,
    post_id: str,
    user_id: str,
    text: str | None,
    publisher: RealtimePublisher | None = None,
) -> Comment:
    """Append a comment to ``post_id`` on behalf of ``user_id``.

    The commenter's display fields are copied into the comment, so later
    profile changes leave existing comments untouched.
    """

    body = (text or "").strip()
    if not body:
        raise ValidationError("El texto del comentario es obligatorio")

    commenter = store.users.get(user_id)
    if commenter is None:
        raise NotFoundError("Usuario no encontrado")

    comment = Comment(
        id=str(uuid4()),
        author_id=commenter.id,
        author_name=commenter.name,
        author_username=commenter.username,
        author_avatar=commenter.avatar,
        text=body,
        created_at=now_in_app_timezone(),
    )
    updated = store.posts.mutate(
        post_id, lambda post: replace(post, comments=[*post.comments, comment])
    )
    if updated is None:
        raise NotFoundError("Publicación no encontrada")

    notify_post_comment(store, post=updated, commenter=commenter, publisher=publisher)
    fan_out(
        store,
        target=AllSessions(),
        event_type=NEW_COMMENT_EVENT,
        payload={"post_id": updated.id, "comment": serialize_comment(comment)},
        publisher=publisher,
    )
    return comment


__all__ = ["NEW_COMMENT_EVENT", "add_comment"]
