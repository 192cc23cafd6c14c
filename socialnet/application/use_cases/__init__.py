"""Aggregate application use cases."""

from .follows import toggle_follow
from .posts import add_comment, create_post, toggle_reaction
from .users import authenticate_user, register_user

__all__ = [
    "add_comment",
    "authenticate_user",
    "create_post",
    "register_user",
    "toggle_follow",
    "toggle_reaction",
]
