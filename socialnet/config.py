"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./socialnet.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    password_hash_rounds: int = Field(
        default=310_000,
        description="PBKDF2 rounds used when hashing passwords",
        gt=0,
    )
    storage_backend: Literal["sql", "memory"] = Field(
        default="sql",
        description="Persistence backing: durable SQL database or process-local memory",
    )
    feed_scope: Literal["following", "global"] = Field(
        default="following",
        description="Whether the feed shows only followed authors or every post",
    )
    post_broadcast_policy: Literal["all", "followers"] = Field(
        default="all",
        description="Realtime audience for newly created posts",
    )
    upload_dir: str = Field(
        default="uploads",
        description="Directory where uploaded media and avatars are stored",
        min_length=1,
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum size accepted for a single uploaded file",
        gt=0,
    )
    max_post_media: int = Field(
        default=5, description="Maximum number of media files per post", gt=0
    )
    app_timezone: str | None = Field(
        default="UTC", description="Timezone used for timestamps"
    )
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        self.log_level = self.log_level.upper()
        if self.log_level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
