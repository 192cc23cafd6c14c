"""Process-local persistence backing.

Every repository shares one :class:`MemoryState` and its lock, so a
read-modify-write done under the lock never interleaves with another writer.
Entities are deep-copied on the way in and out; callers never hold references
into the store's state.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Collection, Sequence
from dataclasses import replace
from uuid import uuid4

from socialnet.domain.entities import FollowEdge, Notification, Post, User
from socialnet.domain.exceptions import ConflictError
from socialnet.domain.repositories import PostMutator
from socialnet.utils import now_in_app_timezone


class _MemoryUserRepository:
    def __init__(self, state: "MemoryState") -> None:
        self._state = state

    def get(self, user_id: str) -> User | None:
        with self._state.lock:
            return copy.deepcopy(self._state.users.get(user_id))

    def get_by_email(self, email: str) -> User | None:
        with self._state.lock:
            for user in self._state.users.values():
                if user.email == email:
                    return copy.deepcopy(user)
        return None

    def get_by_username(self, username: str) -> User | None:
        with self._state.lock:
            for user in self._state.users.values():
                if user.username == username:
                    return copy.deepcopy(user)
        return None

    def get_map_by_ids(self, user_ids: Collection[str]) -> dict[str, User]:
        with self._state.lock:
            return {
                user_id: copy.deepcopy(self._state.users[user_id])
                for user_id in set(user_ids)
                if user_id in self._state.users
            }

    def search(self, query: str, *, limit: int = 20) -> Sequence[User]:
        needle = query.lower()
        with self._state.lock:
            matches = [
                user
                for user in self._state.users.values()
                if needle in user.username.lower() or needle in user.name.lower()
            ]
            matches.sort(key=lambda user: user.username)
            return copy.deepcopy(matches[:limit])

    def create(self, user: User) -> User:
        with self._state.lock:
            self._ensure_unique(user)
            stored = replace(
                copy.deepcopy(user),
                id=user.id or str(uuid4()),
                created_at=user.created_at or now_in_app_timezone(),
            )
            self._state.users[stored.id] = stored
            return copy.deepcopy(stored)

    def update(self, user: User) -> User:
        with self._state.lock:
            if user.id not in self._state.users:
                msg = f"User with id {user.id} not found"
                raise ValueError(msg)
            self._ensure_unique(user)
            self._state.users[user.id] = copy.deepcopy(user)
            return copy.deepcopy(user)

    def delete(self, user_id: str) -> None:
        with self._state.lock:
            self._state.users.pop(user_id, None)
            self._state.posts = {
                post_id: post
                for post_id, post in self._state.posts.items()
                if post.author_id != user_id
            }
            self._state.post_order = [
                post_id for post_id in self._state.post_order if post_id in self._state.posts
            ]
            self._state.follows = {
                key: edge
                for key, edge in self._state.follows.items()
                if user_id not in key
            }
            self._state.notifications = [
                notification
                for notification in self._state.notifications
                if notification.user_id != user_id
            ]

    def _ensure_unique(self, user: User) -> None:
        # Mirrors the unique indexes of the SQL schema.
        for existing in self._state.users.values():
            if existing.id == user.id:
                continue
            if existing.email == user.email:
                raise ConflictError("Ya existe un usuario con ese correo electrónico")
            if existing.username == user.username:
                raise ConflictError("Ese nombre de usuario ya está en uso")


class _MemoryPostRepository:
    def __init__(self, state: "MemoryState") -> None:
        self._state = state

    def get(self, post_id: str) -> Post | None:
        with self._state.lock:
            return copy.deepcopy(self._state.posts.get(post_id))

    def create(self, post: Post) -> Post:
        with self._state.lock:
            stored = replace(
                copy.deepcopy(post),
                id=post.id or str(uuid4()),
                created_at=post.created_at or now_in_app_timezone(),
                version=0,
            )
            self._state.posts[stored.id] = stored
            self._state.post_order.append(stored.id)
            return copy.deepcopy(stored)

    def list_recent(
        self,
        *,
        author_ids: Collection[str] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Post]:
        with self._state.lock:
            # Walking insertion order backwards keeps the newest first among
            # posts sharing a timestamp; ``sorted`` is stable.
            candidates = [
                self._state.posts[post_id]
                for post_id in reversed(self._state.post_order)
                if author_ids is None or self._state.posts[post_id].author_id in author_ids
            ]
            ordered = sorted(candidates, key=lambda post: post.created_at, reverse=True)
            return copy.deepcopy(ordered[offset : offset + limit])

    def count_by_author(self, author_id: str) -> int:
        with self._state.lock:
            return sum(1 for post in self._state.posts.values() if post.author_id == author_id)

    def mutate(self, post_id: str, mutator: PostMutator) -> Post | None:
        with self._state.lock:
            current = self._state.posts.get(post_id)
            if current is None:
                return None
            updated = mutator(copy.deepcopy(current))
            stored = replace(
                current,
                reactions=copy.deepcopy(updated.reactions),
                comments=list(updated.comments),
                version=current.version + 1,
            )
            self._state.posts[post_id] = stored
            return copy.deepcopy(stored)


class _MemoryFollowRepository:
    def __init__(self, state: "MemoryState") -> None:
        self._state = state

    def exists(self, follower_id: str, followee_id: str) -> bool:
        with self._state.lock:
            return (follower_id, followee_id) in self._state.follows

    def create(self, follower_id: str, followee_id: str) -> FollowEdge:
        with self._state.lock:
            edge = FollowEdge(
                follower_id=follower_id,
                followee_id=followee_id,
                created_at=now_in_app_timezone(),
            )
            self._state.follows[(follower_id, followee_id)] = edge
            return edge

    def delete(self, follower_id: str, followee_id: str) -> None:
        with self._state.lock:
            self._state.follows.pop((follower_id, followee_id), None)

    def list_followers(self, user_id: str) -> set[str]:
        with self._state.lock:
            return {follower for follower, followee in self._state.follows if followee == user_id}

    def list_following(self, user_id: str) -> set[str]:
        with self._state.lock:
            return {followee for follower, followee in self._state.follows if follower == user_id}


class _MemoryNotificationRepository:
    def __init__(self, state: "MemoryState") -> None:
        self._state = state

    def create(self, notification: Notification) -> Notification:
        with self._state.lock:
            stored = replace(
                copy.deepcopy(notification),
                id=notification.id or str(uuid4()),
                created_at=notification.created_at or now_in_app_timezone(),
            )
            self._state.notifications.append(stored)
            return copy.deepcopy(stored)

    def list_for_user(self, user_id: str, *, limit: int | None = 50) -> Sequence[Notification]:
        with self._state.lock:
            owned = [n for n in reversed(self._state.notifications) if n.user_id == user_id]
            owned = sorted(owned, key=lambda n: n.created_at, reverse=True)
            if limit is not None:
                owned = owned[:limit]
            return copy.deepcopy(owned)

    def mark_all_read(self, user_id: str) -> int:
        with self._state.lock:
            updated = 0
            for notification in self._state.notifications:
                if notification.user_id == user_id and not notification.is_read:
                    notification.is_read = True
                    updated += 1
            return updated


class MemoryState:
    """Raw collections guarded by a single re-entrant lock."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users: dict[str, User] = {}
        self.posts: dict[str, Post] = {}
        self.post_order: list[str] = []
        self.follows: dict[tuple[str, str], FollowEdge] = {}
        self.notifications: list[Notification] = []


class MemoryStore:
    """In-memory implementation of :class:`socialnet.domain.repositories.Store`."""

    def __init__(self) -> None:
        self.state = MemoryState()
        self.users = _MemoryUserRepository(self.state)
        self.posts = _MemoryPostRepository(self.state)
        self.follows = _MemoryFollowRepository(self.state)
        self.notifications = _MemoryNotificationRepository(self.state)


__all__ = ["MemoryState", "MemoryStore"]
