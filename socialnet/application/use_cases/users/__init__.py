"""Use cases for managing accounts."""

from .authenticate_user import authenticate_user, resolve_token_user
from .delete_account import delete_account
from .get_user import SEARCH_LIMIT, get_profile, get_user, search_users
from .register_user import register_user
from .update_profile import update_avatar, update_profile

__all__ = [
    "SEARCH_LIMIT",
    "authenticate_user",
    "delete_account",
    "get_profile",
    "get_user",
    "register_user",
    "resolve_token_user",
    "search_users",
    "update_avatar",
    "update_profile",
]
