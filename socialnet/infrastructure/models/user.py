"""SQLAlchemy model for the users table."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, String, Text

from socialnet.infrastructure.database import Base
from socialnet.utils import ensure_app_naive_datetime, now_in_app_timezone


def _new_id() -> str:
    return str(uuid4())


def _now_naive():
    return ensure_app_naive_datetime(now_in_app_timezone())


class UserModel(Base):
    """Database representation of a registered account."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    avatar = Column(Text, nullable=True)
    bio = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=_now_naive)


__all__ = ["UserModel"]
