"""Use case for reacting to a post."""

from __future__ import annotations

from dataclasses import replace

from socialnet.domain.entities import AllSessions, REACTION_KINDS, apply_reaction
from socialnet.domain.exceptions import NotFoundError, ValidationError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.realtime import RealtimePublisher

from ..notifications import fan_out, notify_post_reaction

POST_REACTION_EVENT = "post_reaction"


def toggle_reaction(
    store: Store,
    *,
    post_id: str,
    user_id: str,
    reaction: str,
    publisher: RealtimePublisher | None = None,
) -> dict[str, list[str]]:
    """Set ``user_id``'s reaction on ``post_id`` to ``reaction``.

    Any earlier reaction by the same user is replaced. Submitting the same
    kind again leaves it in place; reactions cannot be cleared.
    """

    if reaction not in REACTION_KINDS:
        raise ValidationError("Tipo de reacción inválido")

    updated = store.posts.mutate(
        post_id,
        lambda post: replace(
            post, reactions=apply_reaction(post.reactions, user_id, reaction)
        ),
    )
    if updated is None:
        raise NotFoundError("Publicación no encontrada")

    notify_post_reaction(
        store, post=updated, reactor_id=user_id, reaction=reaction, publisher=publisher
    )
    fan_out(
        store,
        target=AllSessions(),
        event_type=POST_REACTION_EVENT,
        payload={"post_id": updated.id, "reactions": updated.reactions},
        publisher=publisher,
    )
    return updated.reactions


__all__ = ["POST_REACTION_EVENT", "toggle_reaction"]
