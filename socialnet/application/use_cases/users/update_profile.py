"""Use cases for editing a user's profile and avatar."""

from dataclasses import replace

from socialnet.domain.entities import User
from socialnet.domain.exceptions import ConflictError, NotFoundError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.storage import delete_stored_file

from .validators import ensure_valid_username


def update_profile(
    store: Store,
    *,
    user_id: str,
    name: str | None = None,
    username: str | None = None,
    bio: str | None = None,
) -> User:
    """Update the provided fields of ``user_id``'s profile.

    Comments already posted keep the display fields they were written with.
    """

    current = store.users.get(user_id)
    if current is None:
        raise NotFoundError("Usuario no encontrado")

    new_username = current.username
    if username:
        new_username = ensure_valid_username(username)
        if new_username != current.username:
            existing = store.users.get_by_username(new_username)
            if existing and existing.id != user_id:
                raise ConflictError("Ese nombre de usuario ya está en uso")

    updated = replace(
        current,
        name=name.strip() if name and name.strip() else current.name,
        username=new_username,
        bio=bio if bio is not None else current.bio,
    )
    return store.users.update(updated)


def update_avatar(store: Store, *, user_id: str, avatar_url: str) -> User:
    """Point ``user_id``'s avatar at ``avatar_url`` and drop the old file."""

    current = store.users.get(user_id)
    if current is None:
        raise NotFoundError("Usuario no encontrado")

    previous = current.avatar
    updated = store.users.update(replace(current, avatar=avatar_url))
    if previous and previous != avatar_url:
        delete_stored_file(previous)
    return updated
