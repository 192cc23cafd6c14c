"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from socialnet.domain.entities import User
from socialnet.domain.exceptions import ConflictError
from socialnet.infrastructure.models import (
    FollowModel,
    NotificationModel,
    PostModel,
    UserModel,
)
from socialnet.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Collection[str]) -> dict[str, User]:
        if not user_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(set(user_ids)))
        return {model.id: self._to_entity(model) for model in query.all()}

    def search(self, query: str, *, limit: int = 20) -> Sequence[User]:
        pattern = f"%{query.lower()}%"
        models = (
            self.session.query(UserModel)
            .filter(
                or_(
                    func.lower(UserModel.username).like(pattern),
                    func.lower(UserModel.name).like(pattern),
                )
            )
            .order_by(UserModel.username)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self._commit_unique(user)
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self._commit_unique(user)
        self.session.refresh(model)
        return self._to_entity(model)

    def _commit_unique(self, user: User) -> None:
        # A concurrent registration can claim the email or handle between the
        # use case's lookup and this write.
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(
                "Ya existe un usuario con ese correo electrónico o nombre de usuario"
            ) from exc

    def delete(self, user_id: str) -> None:
        # Dependent rows are removed explicitly so the cascade does not rely on
        # the database enforcing ON DELETE.
        self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        ).delete(synchronize_session=False)
        self.session.query(FollowModel).filter(
            or_(FollowModel.follower_id == user_id, FollowModel.followee_id == user_id)
        ).delete(synchronize_session=False)
        self.session.query(PostModel).filter(PostModel.author_id == user_id).delete(
            synchronize_session=False
        )
        self.session.query(UserModel).filter(UserModel.id == user_id).delete(
            synchronize_session=False
        )
        self.session.commit()
        self.session.expire_all()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            username=model.username,
            email=model.email,
            password=model.password,
            avatar=model.avatar,
            bio=model.bio or "",
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            if user.id:
                model.id = user.id
            if user.created_at is not None:
                model.created_at = ensure_app_naive_datetime(user.created_at)
        model.name = user.name
        model.username = user.username
        model.email = user.email
        model.password = user.password
        model.avatar = user.avatar
        model.bio = user.bio or ""


__all__ = ["UserRepository"]
