"""Storage interfaces implemented by every persistence backing."""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence
from typing import Protocol

from .entities import FollowEdge, Notification, Post, User

PostMutator = Callable[[Post], Post]


class UserRepository(Protocol):
    def get(self, user_id: str) -> User | None: ...

    def get_by_email(self, email: str) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def get_map_by_ids(self, user_ids: Collection[str]) -> dict[str, User]: ...

    def search(self, query: str, *, limit: int = 20) -> Sequence[User]: ...

    def create(self, user: User) -> User: ...

    def update(self, user: User) -> User: ...

    def delete(self, user_id: str) -> None:
        """Remove the user with its posts, notifications and follow edges."""


class PostRepository(Protocol):
    def get(self, post_id: str) -> Post | None: ...

    def create(self, post: Post) -> Post: ...

    def list_recent(
        self,
        *,
        author_ids: Collection[str] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Post]:
        """Newest first; ``author_ids=None`` means every author."""

    def count_by_author(self, author_id: str) -> int: ...

    def mutate(self, post_id: str, mutator: PostMutator) -> Post | None:
        """Apply ``mutator`` to the stored post with no interleaved writer.

        Returns ``None`` when the post does not exist. Only ``reactions`` and
        ``comments`` of the returned post are persisted.
        """


class FollowRepository(Protocol):
    def exists(self, follower_id: str, followee_id: str) -> bool: ...

    def create(self, follower_id: str, followee_id: str) -> FollowEdge: ...

    def delete(self, follower_id: str, followee_id: str) -> None: ...

    def list_followers(self, user_id: str) -> set[str]: ...

    def list_following(self, user_id: str) -> set[str]: ...


class NotificationRepository(Protocol):
    def create(self, notification: Notification) -> Notification: ...

    def list_for_user(self, user_id: str, *, limit: int | None = 50) -> Sequence[Notification]: ...

    def mark_all_read(self, user_id: str) -> int: ...


class Store(Protocol):
    """Bundle of repositories sharing one unit of work."""

    users: UserRepository
    posts: PostRepository
    follows: FollowRepository
    notifications: NotificationRepository


__all__ = [
    "FollowRepository",
    "NotificationRepository",
    "PostMutator",
    "PostRepository",
    "Store",
    "UserRepository",
]
