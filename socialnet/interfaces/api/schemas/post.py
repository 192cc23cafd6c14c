"""Pydantic models describing posts, reactions and comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MediaRead(BaseModel):
    type: str
    url: str

    model_config = ConfigDict(from_attributes=True)


class CommentRead(BaseModel):
    id: str
    author_id: str
    author_name: str
    author_username: str
    author_avatar: str | None = None
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostRead(BaseModel):
    """Post joined with its author's current display fields."""

    id: str
    author_id: str
    author_name: str
    author_username: str
    author_avatar: str | None = None
    content: str
    media: list[MediaRead] = Field(default_factory=list)
    reactions: dict[str, list[str]]
    comments: list[CommentRead] = Field(default_factory=list)
    created_at: datetime


class ReactionRequest(BaseModel):
    reaction: str = Field(..., description="One of like, dislike, heart, angry, laugh, cry")


class ReactionsResponse(BaseModel):
    message: str
    reactions: dict[str, list[str]]


class CommentCreate(BaseModel):
    text: str | None = None


__all__ = [
    "CommentCreate",
    "CommentRead",
    "MediaRead",
    "PostRead",
    "ReactionRequest",
    "ReactionsResponse",
]
