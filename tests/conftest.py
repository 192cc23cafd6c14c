"""Shared fixtures: a throwaway SQLite database, upload folder and stores."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DIR = Path(tempfile.mkdtemp(prefix="socialnet-tests-"))
TEST_DB_PATH = TEST_DIR / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["UPLOAD_DIR"] = str(TEST_DIR / "uploads")
os.environ["STORAGE_BACKEND"] = "sql"
os.environ["FEED_SCOPE"] = "following"
os.environ["POST_BROADCAST_POLICY"] = "all"

from socialnet.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from socialnet.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from socialnet.infrastructure.memory_store import MemoryStore  # noqa: E402
from socialnet.infrastructure.realtime import session_registry  # noqa: E402
from socialnet.infrastructure.store import SqlStore  # noqa: E402


class RecordingPublisher:
    """Stand-in for the realtime publisher that remembers every push."""

    def __init__(self, online: set[str] | None = None) -> None:
        self.online = set(online or ())
        self.direct: list[tuple[str, str, object]] = []
        self.broadcasts: list[tuple[str, object, set[str] | None]] = []

    def publish_to_user(self, user_id: str, *, event_type: str, payload: object) -> bool:
        if user_id not in self.online:
            return False
        self.direct.append((user_id, event_type, payload))
        return True

    def broadcast(self, *, event_type: str, payload: object, user_ids=None) -> None:
        self.broadcasts.append(
            (event_type, payload, None if user_ids is None else set(user_ids))
        )


@pytest.fixture(autouse=True)
def reset_database():
    """Every test starts from empty tables and no realtime sessions."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    session_registry.clear()
    yield
    session_registry.clear()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Run the test once against each persistence backing."""

    if request.param == "memory":
        yield MemoryStore()
        return

    session = SessionLocal()
    try:
        yield SqlStore(session)
    finally:
        session.close()


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()
