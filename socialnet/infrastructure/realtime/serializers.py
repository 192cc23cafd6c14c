"""JSON payloads carried by realtime events."""

from __future__ import annotations

from typing import Any

from socialnet.domain.entities import Comment, Notification, PostView


def serialize_comment(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "author_id": comment.author_id,
        "author_name": comment.author_name,
        "author_username": comment.author_username,
        "author_avatar": comment.author_avatar,
        "text": comment.text,
        "created_at": comment.created_at.isoformat() if comment.created_at else None,
    }


def serialize_post_view(view: PostView) -> dict[str, Any]:
    """Return the flattened post shape shared with the HTTP API."""

    post = view.post
    return {
        "id": post.id,
        "author_id": post.author_id,
        "author_name": view.author.name,
        "author_username": view.author.username,
        "author_avatar": view.author.avatar,
        "content": post.content,
        "media": [{"type": item.type, "url": item.url} for item in post.media],
        "reactions": {kind: list(user_ids) for kind, user_ids in post.reactions.items()},
        "comments": [serialize_comment(comment) for comment in post.comments],
        "created_at": post.created_at.isoformat() if post.created_at else None,
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "event_type": notification.event_type,
        "message": notification.message,
        "payload": notification.payload or {},
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["serialize_comment", "serialize_notification", "serialize_post_view"]
