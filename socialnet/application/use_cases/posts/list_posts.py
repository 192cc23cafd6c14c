"""Use cases for reading posts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from socialnet.config import get_settings
from socialnet.domain.entities import AuthorSummary, Post, PostView
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.domain.repositories import Store

FeedScope = Literal["following", "global"]


def _ensure_window(limit: int, offset: int) -> None:
    if limit < 1:
        raise ValidationError("El límite debe ser mayor que cero")
    if offset < 0:
        raise ValidationError("El desplazamiento no puede ser negativo")


def _attach_authors(store: Store, posts: Sequence[Post]) -> list[PostView]:
    """Join each post with its author's current display fields."""

    authors = store.users.get_map_by_ids({post.author_id for post in posts})
    return [
        PostView(post=post, author=AuthorSummary.from_user(authors[post.author_id]))
        for post in posts
        if post.author_id in authors
    ]


def get_feed(
    store: Store,
    *,
    viewer_id: str,
    limit: int = 10,
    offset: int = 0,
    scope: FeedScope | None = None,
) -> list[PostView]:
    """Return the viewer's feed, newest first.

    With the ``following`` scope only posts by the viewer and the accounts
    they follow are included; ``global`` includes every post.
    """

    _ensure_window(limit, offset)
    scope = scope or get_settings().feed_scope
    author_ids: set[str] | None = None
    if scope == "following":
        author_ids = store.follows.list_following(viewer_id) | {viewer_id}
    posts = store.posts.list_recent(author_ids=author_ids, limit=limit, offset=offset)
    return _attach_authors(store, posts)


def get_user_posts(
    store: Store, *, user_id: str, limit: int = 10, offset: int = 0
) -> list[PostView]:
    """Return the posts written by ``user_id``, newest first."""

    _ensure_window(limit, offset)
    if store.users.get(user_id) is None:
        raise NotFoundError("Usuario no encontrado")
    posts = store.posts.list_recent(author_ids={user_id}, limit=limit, offset=offset)
    return _attach_authors(store, posts)


def get_post(store: Store, post_id: str) -> PostView:
    """Return a single post with its author."""

    post = store.posts.get(post_id)
    if post is None:
        raise NotFoundError("Publicación no encontrada")
    views = _attach_authors(store, [post])
    if not views:
        raise NotFoundError("Publicación no encontrada")
    return views[0]


__all__ = ["FeedScope", "get_feed", "get_post", "get_user_posts"]
