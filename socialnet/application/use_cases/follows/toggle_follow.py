"""Use case for following and unfollowing users."""

from __future__ import annotations

from socialnet.domain.entities import FOLLOW_STATUS_FOLLOWED, FOLLOW_STATUS_UNFOLLOWED
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import RealtimePublisher

from ..notifications import notify_new_follower


def toggle_follow(
    store: Store,
    *,
    follower_id: str,
    followee_id: str,
    publisher: RealtimePublisher | None = None,
) -> str:
    """Flip the follow edge between two users.

    Returns ``"followed"`` when the edge was created and ``"unfollowed"`` when
    it was removed. Only new follows notify the followee.
    """

    if follower_id == followee_id:
        raise ValidationError("No puedes seguirte a ti mismo")

    users = store.users.get_map_by_ids({follower_id, followee_id})
    if followee_id not in users:
        raise NotFoundError("Usuario no encontrado")
    follower = users.get(follower_id)
    if follower is None:
        raise NotFoundError("Usuario no encontrado")

    if store.follows.exists(follower_id, followee_id):
        store.follows.delete(follower_id, followee_id)
        return FOLLOW_STATUS_UNFOLLOWED

    store.follows.create(follower_id, followee_id)
    notify_new_follower(store, follower=follower, followee_id=followee_id, publisher=publisher)
    return FOLLOW_STATUS_FOLLOWED
