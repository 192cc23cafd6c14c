"""SQLAlchemy model for posts with embedded reactions and comments."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from socialnet.domain.entities import empty_reactions
from socialnet.infrastructure.database import Base

from .user import _new_id, _now_naive


class PostModel(Base):
    """Database representation of a post.

    ``reactions`` and ``comments`` are JSON documents rewritten as a whole;
    ``version`` is bumped on every rewrite so concurrent writers can detect
    that the document changed underneath them.
    """

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=_new_id)
    author_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    media = Column(JSON, nullable=False, default=list)
    reactions = Column(JSON, nullable=False, default=empty_reactions)
    comments = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=_now_naive, index=True)


__all__ = ["PostModel"]
