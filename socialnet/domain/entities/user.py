"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Core attributes describing a registered account."""

    id: str | None
    name: str
    username: str
    email: str
    password: str
    avatar: str | None = None
    bio: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class AuthorSummary:
    """Display fields of a user joined onto posts at read time."""

    id: str
    name: str
    username: str
    avatar: str | None

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(id=user.id, name=user.name, username=user.username, avatar=user.avatar)


@dataclass(frozen=True)
class UserProfile:
    """Public profile of ``user`` as seen by another account."""

    user: User
    followers_count: int
    following_count: int
    posts_count: int
    is_following: bool


__all__ = ["AuthorSummary", "User", "UserProfile"]
