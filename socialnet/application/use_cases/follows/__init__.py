"""Use cases for the follow graph."""

from .list_follows import get_followers, get_following
from .toggle_follow import toggle_follow

__all__ = ["get_followers", "get_following", "toggle_follow"]
