from .auth import AuthResponse, LoginRequest, RegisterRequest
from .notification import NotificationRead, NotificationsMarkedRead
from .post import (
    CommentCreate,
    CommentRead,
    MediaRead,
    PostRead,
    ReactionRequest,
    ReactionsResponse,
)
from .user import (
    AvatarResponse,
    FollowResponse,
    MessageResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    UserProfileRead,
    UserRead,
    UserSummaryRead,
)

__all__ = [
    "AuthResponse",
    "AvatarResponse",
    "CommentCreate",
    "CommentRead",
    "FollowResponse",
    "LoginRequest",
    "MediaRead",
    "MessageResponse",
    "NotificationRead",
    "NotificationsMarkedRead",
    "PostRead",
    "ProfileUpdate",
    "ProfileUpdateResponse",
    "ReactionRequest",
    "ReactionsResponse",
    "RegisterRequest",
    "UserProfileRead",
    "UserRead",
    "UserSummaryRead",
]
