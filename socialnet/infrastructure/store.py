"""Selection of the persistence backing for each unit of work."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.orm import Session

from socialnet.config import get_settings
from socialnet.domain.repositories import Store
from socialnet.infrastructure.database import SessionLocal
from socialnet.infrastructure.memory_store import MemoryStore
from socialnet.infrastructure.repositories import (
    FollowRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
)


class SqlStore:
    """SQLAlchemy implementation of :class:`Store` bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.posts = PostRepository(session)
        self.follows = FollowRepository(session)
        self.notifications = NotificationRepository(session)


def build_memory_store() -> MemoryStore | None:
    """Return the process-wide store when the memory backing is configured."""

    if get_settings().storage_backend == "memory":
        return MemoryStore()
    return None


@contextmanager
def store_scope(app: Any) -> Iterator[Store]:
    """Yield the store for one request or websocket message.

    The memory backing is shared and lives on ``app.state``; the SQL backing
    opens a fresh session that is closed on exit.
    """

    memory_store = getattr(app.state, "memory_store", None)
    if memory_store is not None:
        yield memory_store
        return

    session = SessionLocal()
    try:
        yield SqlStore(session)
    finally:
        session.close()


__all__ = ["SqlStore", "build_memory_store", "store_scope"]
