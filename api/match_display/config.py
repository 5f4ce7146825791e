"""Configuration for the match-display API."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env

_DEFAULT_CORS_ORIGINS = (
    "http://localhost:8081",
    "http://127.0.0.1:8081",
    "http://localhost:19006",
    "http://127.0.0.1:19006",
)


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local development."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "..", "..", ".env"),
        env_file_encoding="utf-8",
        extra="allow",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")
    # Upstream schedule times are civil times in this zone, whatever marker they carry.
    source_timezone: str = Field(default="America/New_York", alias="SOURCE_TIMEZONE")
    # Empty means "use the host's local zone".
    viewer_timezone: str | None = Field(default=None, alias="VIEWER_TIMEZONE")
    cors_origins: str | None = Field(default=None, alias="ALLOWED_CORS_ORIGINS")

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Explicit origins when configured, Expo dev-server ports otherwise."""
        if self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return list(_DEFAULT_CORS_ORIGINS)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance, validating the environment first."""
    validate_env()
    return Settings()


settings = get_settings()
