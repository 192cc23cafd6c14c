"""Domain entities exposed by the application."""

from .fanout import AllSessions, FanoutTarget, FollowersOf
from .follow import FOLLOW_STATUS_FOLLOWED, FOLLOW_STATUS_UNFOLLOWED, FollowEdge
from .notification import (
    NOTIFICATION_COMMENT,
    NOTIFICATION_FOLLOW,
    NOTIFICATION_NEW_POST,
    NOTIFICATION_REACTION,
    NOTIFICATION_TYPES,
    Notification,
)
from .post import (
    MEDIA_TYPE_IMAGE,
    MEDIA_TYPE_VIDEO,
    REACTION_KINDS,
    Comment,
    MediaItem,
    Post,
    PostView,
    apply_reaction,
    empty_reactions,
)
from .user import AuthorSummary, User, UserProfile

__all__ = [
    "AllSessions",
    "AuthorSummary",
    "Comment",
    "FOLLOW_STATUS_FOLLOWED",
    "FOLLOW_STATUS_UNFOLLOWED",
    "FanoutTarget",
    "FollowEdge",
    "FollowersOf",
    "MEDIA_TYPE_IMAGE",
    "MEDIA_TYPE_VIDEO",
    "MediaItem",
    "NOTIFICATION_COMMENT",
    "NOTIFICATION_FOLLOW",
    "NOTIFICATION_NEW_POST",
    "NOTIFICATION_REACTION",
    "NOTIFICATION_TYPES",
    "Notification",
    "Post",
    "PostView",
    "REACTION_KINDS",
    "User",
    "UserProfile",
    "apply_reaction",
    "empty_reactions",
]
