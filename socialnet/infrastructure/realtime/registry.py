"""Registry of live realtime connections and their authenticated users."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import uuid4

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of one realtime connection."""

    CONNECTED = "connected"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


@dataclass
class RealtimeSession:
    """A live websocket and the user it authenticated as, if any."""

    id: str
    websocket: WebSocket
    state: SessionState = SessionState.CONNECTED
    user_id: str | None = None


class RealtimeSessionRegistry:
    """Track open connections and map each user to one active session.

    A second authentication for the same user overwrites the mapping; the
    earlier connection stays open and keeps receiving broadcasts but no
    longer receives targeted pushes.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, RealtimeSession] = {}
        self._user_sessions: dict[str, str] = {}

    async def connect(self, websocket: WebSocket) -> RealtimeSession:
        """Accept ``websocket`` and register it as an anonymous session."""

        await websocket.accept()
        session = RealtimeSession(id=uuid4().hex, websocket=websocket)
        self._sessions[session.id] = session
        return session

    def authenticate(self, session_id: str, user_id: str) -> RealtimeSession:
        """Bind ``session_id`` to ``user_id``."""

        session = self._sessions.get(session_id)
        if session is None or session.state is SessionState.CLOSED:
            raise KeyError(session_id)
        if session.user_id and self._user_sessions.get(session.user_id) == session_id:
            self._user_sessions.pop(session.user_id, None)
        session.user_id = user_id
        session.state = SessionState.AUTHENTICATED
        self._user_sessions[user_id] = session_id
        return session

    def disconnect(self, session_id: str) -> None:
        """Forget ``session_id``; its user mapping goes only if it still points here."""

        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.state = SessionState.CLOSED
        if session.user_id and self._user_sessions.get(session.user_id) == session_id:
            self._user_sessions.pop(session.user_id, None)

    async def close(self, session_id: str, *, code: int = 1000) -> None:
        """Close the underlying websocket and drop the session."""

        session = self._sessions.get(session_id)
        self.disconnect(session_id)
        if session is None:
            return
        try:
            await session.websocket.close(code=code)
        except Exception as exc:  # transport already gone
            logger.debug("Closing session %s failed: %s", session_id, exc)

    def get(self, session_id: str) -> RealtimeSession | None:
        return self._sessions.get(session_id)

    def session_for_user(self, user_id: str) -> RealtimeSession | None:
        session_id = self._user_sessions.get(user_id)
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def is_online(self, user_id: str) -> bool:
        return self.session_for_user(user_id) is not None

    def active_sessions(self) -> list[RealtimeSession]:
        return list(self._sessions.values())

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> bool:
        """Send ``message`` to the active session of ``user_id``."""

        session = self.session_for_user(user_id)
        if session is None:
            return False
        return await self._send(session, message)

    async def broadcast(
        self, message: dict[str, Any], user_ids: Iterable[str] | None = None
    ) -> int:
        """Send ``message`` to every open session, or to those of ``user_ids``."""

        if user_ids is None:
            targets = self.active_sessions()
        else:
            targets = [
                session
                for session in (self.session_for_user(user_id) for user_id in set(user_ids))
                if session is not None
            ]

        delivered = 0
        for session in targets:
            if await self._send(session, message):
                delivered += 1
        return delivered

    async def _send(self, session: RealtimeSession, message: dict[str, Any]) -> bool:
        try:
            await session.websocket.send_json(message)
        except Exception as exc:  # stale connection; the caller keeps going
            logger.debug("Dropping realtime session %s after failed send: %s", session.id, exc)
            self.disconnect(session.id)
            return False
        return True

    def clear(self) -> None:
        """Forget every session; used when the process shuts down."""

        for session in self._sessions.values():
            session.state = SessionState.CLOSED
        self._sessions.clear()
        self._user_sessions.clear()


session_registry = RealtimeSessionRegistry()


__all__ = [
    "RealtimeSession",
    "RealtimeSessionRegistry",
    "SessionState",
    "session_registry",
]
