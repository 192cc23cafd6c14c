"""Domain entities for posts and their embedded engagement."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Sequence

from .user import AuthorSummary

REACTION_KINDS: tuple[str, ...] = ("like", "dislike", "heart", "angry", "laugh", "cry")

MEDIA_TYPE_IMAGE = "image"
MEDIA_TYPE_VIDEO = "video"


def empty_reactions() -> dict[str, list[str]]:
    """Return a reaction map with every kind present and no users."""

    return {kind: [] for kind in REACTION_KINDS}


def apply_reaction(
    reactions: Mapping[str, Sequence[str]], user_id: str, kind: str
) -> dict[str, list[str]]:
    """Return a copy of ``reactions`` where ``user_id`` reacted with ``kind``.

    The user is first removed from every kind and then appended to ``kind``,
    so a user appears in at most one bucket. Sending the same kind twice keeps
    the reaction in place; there is no way to clear it.
    """

    updated = empty_reactions()
    for existing_kind, user_ids in reactions.items():
        updated[existing_kind] = [uid for uid in user_ids if uid != user_id]
    updated[kind].append(user_id)
    return updated


@dataclass(frozen=True)
class MediaItem:
    """Uploaded attachment referenced by a post."""

    type: str
    url: str


@dataclass(frozen=True)
class Comment:
    """Snapshot of a comment and its author at the time it was posted."""

    id: str
    author_id: str
    author_name: str
    author_username: str
    author_avatar: str | None
    text: str
    created_at: datetime


@dataclass
class Post:
    """A post with its reaction map and append-only comment list."""

    id: str | None
    author_id: str
    content: str
    media: list[MediaItem] = field(default_factory=list)
    reactions: dict[str, list[str]] = field(default_factory=empty_reactions)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime | None = None
    version: int = 0


@dataclass(frozen=True)
class PostView:
    """A post enriched with its author's current display fields."""

    post: Post
    author: AuthorSummary


__all__ = [
    "Comment",
    "MEDIA_TYPE_IMAGE",
    "MEDIA_TYPE_VIDEO",
    "MediaItem",
    "Post",
    "PostView",
    "REACTION_KINDS",
    "apply_reaction",
    "empty_reactions",
]
