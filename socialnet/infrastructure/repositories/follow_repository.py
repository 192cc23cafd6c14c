"""Persistence helpers for follow edges."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialnet.domain.entities import FollowEdge
from socialnet.infrastructure.models import FollowModel
from socialnet.utils import ensure_app_timezone


class FollowRepository:
    """Answer who follows whom and flip individual edges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, follower_id: str, followee_id: str) -> bool:
        return self.session.get(FollowModel, (follower_id, followee_id)) is not None

    def create(self, follower_id: str, followee_id: str) -> FollowEdge:
        """Insert the edge; an edge written concurrently by another request is reused."""

        model = FollowModel(follower_id=follower_id, followee_id=followee_id)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            model = self.session.get(FollowModel, (follower_id, followee_id))
            if model is None:
                raise
        else:
            self.session.refresh(model)
        return FollowEdge(
            follower_id=model.follower_id,
            followee_id=model.followee_id,
            created_at=ensure_app_timezone(model.created_at),
        )

    def delete(self, follower_id: str, followee_id: str) -> None:
        self.session.query(FollowModel).filter(
            FollowModel.follower_id == follower_id,
            FollowModel.followee_id == followee_id,
        ).delete(synchronize_session=False)
        self.session.commit()

    def list_followers(self, user_id: str) -> set[str]:
        rows = (
            self.session.query(FollowModel.follower_id)
            .filter(FollowModel.followee_id == user_id)
            .all()
        )
        return {follower_id for (follower_id,) in rows}

    def list_following(self, user_id: str) -> set[str]:
        rows = (
            self.session.query(FollowModel.followee_id)
            .filter(FollowModel.follower_id == user_id)
            .all()
        )
        return {followee_id for (followee_id,) in rows}


__all__ = ["FollowRepository"]
