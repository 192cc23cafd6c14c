"""Audience selectors for realtime broadcasts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AllSessions:
    """Every open realtime connection, authenticated or not."""


@dataclass(frozen=True)
class FollowersOf:
    """Authenticated sessions of the followers of ``author_id``."""

    author_id: str


FanoutTarget = Union[AllSessions, FollowersOf]


__all__ = ["AllSessions", "FanoutTarget", "FollowersOf"]
