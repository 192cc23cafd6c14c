"""Use cases for the post aggregate: publishing, reactions, comments and reads."""

from .add_comment import NEW_COMMENT_EVENT, add_comment
from .create_post import (
    NEW_POST_EVENT,
    create_post,
    default_post_broadcast_target,
    normalize_post_content,
)
from .list_posts import get_feed, get_post, get_user_posts
from .toggle_reaction import POST_REACTION_EVENT, toggle_reaction

__all__ = [
    "NEW_COMMENT_EVENT",
    "NEW_POST_EVENT",
    "POST_REACTION_EVENT",
    "add_comment",
    "create_post",
    "default_post_broadcast_target",
    "get_feed",
    "get_post",
    "get_user_posts",
    "normalize_post_content",
    "toggle_reaction",
]
