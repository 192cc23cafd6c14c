"""ORM models used by the application infrastructure."""

from .follow import FollowModel
from .notification import NotificationModel
from .post import PostModel
from .user import UserModel

__all__ = [
    "FollowModel",
    "NotificationModel",
    "PostModel",
    "UserModel",
]
