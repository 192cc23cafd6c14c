"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRead(BaseModel):
    id: str
    name: str
    username: str
    email: EmailStr
    avatar: str | None = None
    bio: str = ""
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserSummaryRead(BaseModel):
    id: str
    name: str
    username: str
    avatar: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserProfileRead(UserSummaryRead):
    bio: str = ""
    followers_count: int
    following_count: int
    posts_count: int
    is_following: bool


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=1000)

    model_config = ConfigDict(extra="forbid")


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserRead


class AvatarResponse(BaseModel):
    message: str
    avatar: str


class FollowResponse(BaseModel):
    message: str
    following: bool


class MessageResponse(BaseModel):
    message: str
