"""Repository implementations for infrastructure layer."""

from .follow_repository import FollowRepository
from .notification_repository import NotificationRepository
from .post_repository import PostRepository
from .user_repository import UserRepository

__all__ = [
    "FollowRepository",
    "NotificationRepository",
    "PostRepository",
    "UserRepository",
]
