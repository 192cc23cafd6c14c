"""Endpoints for reading and acknowledging notifications."""

from fastapi import APIRouter, Depends, Query

from socialnet.application.use_cases.notifications import (
    DEFAULT_NOTIFICATION_LIMIT,
    list_notifications as list_notifications_uc,
    mark_all_read as mark_all_read_uc,
)
from socialnet.domain.entities import User
from socialnet.domain.repositories import Store
from socialnet.interfaces.api.dependencies import get_current_user, get_store
from socialnet.interfaces.api.routes_helpers import notification_to_read_model
from socialnet.interfaces.api.schemas import NotificationRead, NotificationsMarkedRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(DEFAULT_NOTIFICATION_LIMIT, ge=1, le=200),
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(store, current_user.id, limit=limit)
    return [notification_to_read_model(notification) for notification in notifications]


@router.post("/read", response_model=NotificationsMarkedRead)
def mark_notifications_read(
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> NotificationsMarkedRead:
    """Marca todas las notificaciones como leídas."""

    updated = mark_all_read_uc(store, current_user.id)
    return NotificationsMarkedRead(message="Notificaciones marcadas como leídas", updated=updated)
