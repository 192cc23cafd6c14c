"""Realtime session tracking and push helpers for the infrastructure layer."""

from .publisher import RealtimePublisher, realtime_publisher
from .registry import (
    RealtimeSession,
    RealtimeSessionRegistry,
    SessionState,
    session_registry,
)
from .serializers import serialize_comment, serialize_notification, serialize_post_view

__all__ = [
    "RealtimePublisher",
    "RealtimeSession",
    "RealtimeSessionRegistry",
    "SessionState",
    "realtime_publisher",
    "serialize_comment",
    "serialize_notification",
    "serialize_post_view",
    "session_registry",
]
