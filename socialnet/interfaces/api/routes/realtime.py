"""Websocket endpoint for realtime pushes."""

import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool

from socialnet.application.use_cases.notifications import list_notifications
from socialnet.application.use_cases.users import resolve_token_user
from socialnet.domain.exceptions import AuthError
from socialnet.infrastructure.realtime import (
    RealtimeSession,
    serialize_notification,
    session_registry,
)
from socialnet.infrastructure.store import store_scope

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)

AUTHENTICATE_MESSAGE = "authenticate"
AUTHENTICATED_EVENT = "authenticated"
PING_MESSAGE = "ping"
PONG_EVENT = "pong"


def _resolve_session_user(app: Any, token: str | None) -> dict[str, Any]:
    """Validate ``token`` and collect what the client needs after login."""

    with store_scope(app) as store:
        user = resolve_token_user(store, token)
        pending = [
            serialize_notification(notification)
            for notification in list_notifications(store, user.id)
            if not notification.is_read
        ]
    return {"user_id": user.id, "pending_notifications": pending}


async def _authenticate(websocket: WebSocket, session: RealtimeSession, token: Any) -> bool:
    try:
        data = await run_in_threadpool(
            _resolve_session_user, websocket.app, token if isinstance(token, str) else None
        )
    except AuthError as exc:
        logger.warning("Realtime authentication rejected for session %s: %s", session.id, exc)
        await session_registry.close(session.id, code=status.WS_1008_POLICY_VIOLATION)
        return False

    try:
        session_registry.authenticate(session.id, data["user_id"])
    except KeyError:
        # The connection dropped while the token was being checked.
        return False
    logger.info("Realtime session %s authenticated as %s", session.id, data["user_id"])
    await websocket.send_json({"type": AUTHENTICATED_EVENT, "data": data})
    return True


@router.websocket("/ws")
async def realtime_endpoint(websocket: WebSocket) -> None:
    """Canal en tiempo real para publicaciones, reacciones y notificaciones.

    El cliente puede autenticarse con ``?token=`` al conectar o enviando
    ``{"type": "authenticate", "token": "..."}``.
    """

    session = await session_registry.connect(websocket)
    try:
        query_token = websocket.query_params.get("token")
        if query_token and not await _authenticate(websocket, session, query_token):
            return

        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.debug("Ignoring malformed realtime message on session %s", session.id)
                continue
            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == AUTHENTICATE_MESSAGE:
                if not await _authenticate(websocket, session, message.get("token")):
                    return
            elif message_type == PING_MESSAGE:
                await websocket.send_json({"type": PONG_EVENT, "data": None})
    except WebSocketDisconnect:
        logger.info("Realtime session %s disconnected", session.id)
    finally:
        session_registry.disconnect(session.id)
