"""Use case for deleting an account and everything it owns."""

import logging

from socialnet.domain.exceptions import NotFoundError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.storage import delete_user_folder

logger = logging.getLogger(__name__)


def delete_account(store: Store, user_id: str) -> None:
    """Remove the user with its posts, notifications, follow edges and uploads.

    Reactions and comments the user left on other people's posts are kept.
    """

    if store.users.get(user_id) is None:
        raise NotFoundError("Usuario no encontrado")
    store.users.delete(user_id)
    delete_user_folder(user_id)
    logger.info("Deleted account %s", user_id)
