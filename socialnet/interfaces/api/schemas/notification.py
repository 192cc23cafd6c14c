"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    event_type: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationsMarkedRead(BaseModel):
    message: str
    updated: int


__all__ = ["NotificationRead", "NotificationsMarkedRead"]
