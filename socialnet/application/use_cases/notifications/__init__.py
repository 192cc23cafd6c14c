"""Public helpers for emitting and reading notifications."""

from .dispatcher import NOTIFICATION_EVENT, fan_out, notify, resolve_fanout_recipients
from .events import (
    notify_new_follower,
    notify_new_post,
    notify_post_comment,
    notify_post_reaction,
)
from .inbox import DEFAULT_NOTIFICATION_LIMIT, list_notifications, mark_all_read

__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "NOTIFICATION_EVENT",
    "fan_out",
    "list_notifications",
    "mark_all_read",
    "notify",
    "notify_new_follower",
    "notify_new_post",
    "notify_post_comment",
    "notify_post_reaction",
    "resolve_fanout_recipients",
]
