"""Persistence helpers for posts and their embedded engagement."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import Any

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from socialnet.domain.entities import (
    REACTION_KINDS,
    Comment,
    MediaItem,
    Post,
    empty_reactions,
)
from socialnet.domain.exceptions import ServerError
from socialnet.domain.repositories import PostMutator
from socialnet.infrastructure.models import PostModel
from socialnet.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    parse_iso_datetime,
)

logger = logging.getLogger(__name__)

_MAX_WRITE_ATTEMPTS = 10


class PostRepository:
    """Provide CRUD operations for :class:`Post` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, post_id: str) -> Post | None:
        model = self.session.get(PostModel, post_id)
        return self._to_entity(model) if model else None

    def create(self, post: Post) -> Post:
        model = PostModel()
        if post.id:
            model.id = post.id
        model.author_id = post.author_id
        model.content = post.content
        model.media = _media_to_json(post.media)
        model.reactions = _reactions_to_json(post.reactions)
        model.comments = [_comment_to_json(comment) for comment in post.comments]
        model.version = 0
        if post.created_at is not None:
            model.created_at = ensure_app_naive_datetime(post.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(
        self,
        *,
        author_ids: Collection[str] | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Post]:
        query = self.session.query(PostModel)
        if author_ids is not None:
            if not author_ids:
                return []
            query = query.filter(PostModel.author_id.in_(set(author_ids)))
        query = query.order_by(PostModel.created_at.desc(), PostModel.id.desc())
        return [self._to_entity(model) for model in query.offset(offset).limit(limit).all()]

    def count_by_author(self, author_id: str) -> int:
        return (
            self.session.query(func.count(PostModel.id))
            .filter(PostModel.author_id == author_id)
            .scalar()
            or 0
        )

    def mutate(self, post_id: str, mutator: PostMutator) -> Post | None:
        """Compare-and-swap the engagement documents of ``post_id``.

        The row is only written when ``version`` still matches what was read;
        otherwise another writer got there first and the mutation is replayed
        on the fresh document.
        """

        for attempt in range(1, _MAX_WRITE_ATTEMPTS + 1):
            self.session.expire_all()
            current = self.get(post_id)
            if current is None:
                return None

            updated = mutator(current)
            result = self.session.execute(
                update(PostModel)
                .where(PostModel.id == post_id, PostModel.version == current.version)
                .values(
                    reactions=_reactions_to_json(updated.reactions),
                    comments=[_comment_to_json(comment) for comment in updated.comments],
                    version=current.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
            if result.rowcount == 1:
                self.session.expire_all()
                return self.get(post_id)

            logger.debug("Post %s changed concurrently, retrying (attempt %s)", post_id, attempt)

        raise ServerError(f"Could not update post {post_id} after concurrent writes")

    @staticmethod
    def _to_entity(model: PostModel) -> Post:
        return Post(
            id=model.id,
            author_id=model.author_id,
            content=model.content,
            media=[MediaItem(type=item["type"], url=item["url"]) for item in model.media or []],
            reactions=_reactions_from_json(model.reactions),
            comments=[_comment_from_json(item) for item in model.comments or []],
            created_at=ensure_app_timezone(model.created_at),
            version=model.version or 0,
        )


def _media_to_json(media: Sequence[MediaItem]) -> list[dict[str, str]]:
    return [{"type": item.type, "url": item.url} for item in media]


def _reactions_to_json(reactions: dict[str, list[str]]) -> dict[str, list[str]]:
    return {kind: list(reactions.get(kind, [])) for kind in REACTION_KINDS}


def _reactions_from_json(raw: dict[str, Any] | None) -> dict[str, list[str]]:
    reactions = empty_reactions()
    for kind, user_ids in (raw or {}).items():
        if kind in reactions:
            reactions[kind] = list(user_ids or [])
    return reactions


def _comment_to_json(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "author_id": comment.author_id,
        "author_name": comment.author_name,
        "author_username": comment.author_username,
        "author_avatar": comment.author_avatar,
        "text": comment.text,
        "created_at": comment.created_at.isoformat(),
    }


def _comment_from_json(raw: dict[str, Any]) -> Comment:
    return Comment(
        id=raw["id"],
        author_id=raw["author_id"],
        author_name=raw["author_name"],
        author_username=raw["author_username"],
        author_avatar=raw.get("author_avatar"),
        text=raw["text"],
        created_at=parse_iso_datetime(raw["created_at"]),
    )


__all__ = ["PostRepository"]
