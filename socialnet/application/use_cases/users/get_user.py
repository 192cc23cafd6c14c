"""Use cases for looking users up."""

from collections.abc import Sequence

from socialnet.domain.entities import User, UserProfile
from socialnet.domain.exceptions import NotFoundError
from socialnet.domain.repositories import Store

SEARCH_LIMIT = 20


def get_user(store: Store, user_id: str) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = store.users.get(user_id)
    if user is None:
        raise NotFoundError("Usuario no encontrado")
    return user


def get_profile(store: Store, *, viewer_id: str, user_id: str) -> UserProfile:
    """Return ``user_id``'s public profile as seen by ``viewer_id``."""

    user = get_user(store, user_id)
    followers = store.follows.list_followers(user_id)
    return UserProfile(
        user=user,
        followers_count=len(followers),
        following_count=len(store.follows.list_following(user_id)),
        posts_count=store.posts.count_by_author(user_id),
        is_following=viewer_id in followers,
    )


def search_users(store: Store, query: str | None) -> Sequence[User]:
    """Case-insensitive substring search over handles and names."""

    needle = (query or "").strip()
    if not needle:
        return []
    return store.users.search(needle, limit=SEARCH_LIMIT)
