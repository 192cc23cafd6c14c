"""Queries over the follow graph."""

from __future__ import annotations

from socialnet.domain.repositories import Store


def get_followers(store: Store, user_id: str) -> set[str]:
    """Return the ids of the users following ``user_id``."""

    return store.follows.list_followers(user_id)


def get_following(store: Store, user_id: str) -> set[str]:
    """Return the ids of the users ``user_id`` follows."""

    return store.follows.list_following(user_id)
