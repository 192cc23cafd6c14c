"""Schedule realtime messages onto the event loop that owns the websockets."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from anyio import from_thread

from .registry import RealtimeSessionRegistry, session_registry

logger = logging.getLogger(__name__)


class RealtimePublisher:
    """Wrap payloads as ``{"type", "data"}`` messages and deliver them best-effort."""

    def __init__(self, registry: RealtimeSessionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task[Any]] = set()

    def publish_to_user(self, user_id: str, *, event_type: str, payload: Any) -> bool:
        """Push an event to ``user_id`` when it has a live session.

        Returns ``False`` without scheduling anything when the user is offline.
        """

        if not user_id or not self._registry.is_online(user_id):
            return False

        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule(self._registry.send_to_user, user_id, message)
        return True

    def broadcast(
        self,
        *,
        event_type: str,
        payload: Any,
        user_ids: Iterable[str] | None = None,
    ) -> None:
        """Push an event to every open session, or only to ``user_ids``."""

        recipients = None if user_ids is None else {uid for uid in user_ids if uid}
        if recipients is not None and not recipients:
            return

        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule(self._registry.broadcast, message, recipients)

    def _schedule(self, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(func, *args)
            except RuntimeError as exc:
                # Not inside an AnyIO worker thread: no event loop to push on.
                logger.debug("Realtime push skipped: %s", exc)
        else:
            task = loop.create_task(func(*args))
            # The loop only keeps weak references to tasks.
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    def pending_count(self) -> int:
        """Number of deliveries scheduled on the running loop and not yet finished."""

        return len(self._pending)


realtime_publisher = RealtimePublisher(session_registry)


__all__ = ["RealtimePublisher", "realtime_publisher"]
