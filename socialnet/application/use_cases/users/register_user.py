"""Use case for registering a new account."""

import logging

from socialnet.domain.entities import User
from socialnet.domain.exceptions import ConflictError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.security import get_password_hash
from socialnet.utils import now_in_app_timezone

from .validators import (
    ensure_required,
    ensure_valid_password,
    ensure_valid_username,
    normalize_email,
)

logger = logging.getLogger(__name__)


def register_user(
    store: Store,
    *,
    name: str | None,
    username: str | None,
    email: str | None,
    password: str | None,
) -> User:
    """Create a new user ensuring unique email addresses and handles."""

    ensure_required(name=name, username=username, email=email, password=password)
    handle = ensure_valid_username(username)
    ensure_valid_password(password)
    normalized_email = normalize_email(email)

    if store.users.get_by_email(normalized_email):
        raise ConflictError("Ya existe un usuario con ese correo electrónico")
    if store.users.get_by_username(handle):
        raise ConflictError("Ese nombre de usuario ya está en uso")

    user = store.users.create(
        User(
            id=None,
            name=name.strip(),
            username=handle,
            email=normalized_email,
            password=get_password_hash(password),
            avatar=None,
            bio="",
            created_at=now_in_app_timezone(),
        )
    )
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user
