"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from socialnet.domain.entities import Comment, Notification, PostView, User, UserProfile
from socialnet.domain.exceptions import AuthError, DomainError, NotFoundError, ServerError
from socialnet.interfaces.api.schemas import (
    CommentRead,
    NotificationRead,
    PostRead,
    UserProfileRead,
    UserRead,
)

GENERIC_SERVER_ERROR = "Error del servidor"


def to_http_exception(exc: DomainError) -> HTTPException:
    """Map a domain error onto the HTTP status reported to the client."""

    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, AuthError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )
    if isinstance(exc, ServerError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_SERVER_ERROR,
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def pagination_window(page: int, limit: int) -> tuple[int, int]:
    """Translate 1-based ``page``/``limit`` into ``(limit, offset)``."""

    return limit, (page - 1) * limit


def user_to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


def profile_to_read_model(profile: UserProfile) -> UserProfileRead:
    user = profile.user
    return UserProfileRead(
        id=user.id,
        name=user.name,
        username=user.username,
        avatar=user.avatar,
        bio=user.bio,
        followers_count=profile.followers_count,
        following_count=profile.following_count,
        posts_count=profile.posts_count,
        is_following=profile.is_following,
    )


def comment_to_read_model(comment: Comment) -> CommentRead:
    return CommentRead.model_validate(comment)


def post_to_read_model(view: PostView) -> PostRead:
    post = view.post
    return PostRead(
        id=post.id,
        author_id=post.author_id,
        author_name=view.author.name,
        author_username=view.author.username,
        author_avatar=view.author.avatar,
        content=post.content,
        media=[{"type": item.type, "url": item.url} for item in post.media],
        reactions=post.reactions,
        comments=[comment_to_read_model(comment) for comment in post.comments],
        created_at=post.created_at,
    )


def notification_to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)
