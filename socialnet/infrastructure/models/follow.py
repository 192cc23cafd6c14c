"""SQLAlchemy model for follow edges."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String

from socialnet.infrastructure.database import Base

from .user import _now_naive


class FollowModel(Base):
    """``follower_id`` follows ``followee_id``; one row per pair."""

    __tablename__ = "followers"
    __table_args__ = (
        CheckConstraint("follower_id != followee_id", name="ck_followers_no_self_follow"),
    )

    follower_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followee_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=_now_naive)


__all__ = ["FollowModel"]
