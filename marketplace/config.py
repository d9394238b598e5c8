"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"
DEFAULT_DATABASE_URL = "sqlite:///./marketplace.db"
DEFAULT_ONESIGNAL_API_URL = "https://onesignal.com/api/v1/notifications"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:8081"],
        description="Origins allowed to call the API from a browser",
    )
    onesignal_app_id: str | None = Field(
        default=None,
        description="OneSignal application id used as ``app_id`` in push requests",
    )
    onesignal_rest_api_key: str | None = Field(
        default=None,
        description="OneSignal REST API key sent in the Authorization header",
    )
    onesignal_api_url: str = Field(
        default=DEFAULT_ONESIGNAL_API_URL,
        description="Endpoint that accepts push notification requests",
        min_length=1,
    )
    push_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for the push provider before giving up",
        gt=0,
    )
    location_max_age_hours: float | None = Field(
        default=None,
        description=(
            "When set, user locations older than this are ignored while "
            "targeting nearby users"
        ),
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_onesignal_pair(self) -> "Settings":
        if bool(self.onesignal_app_id) ^ bool(self.onesignal_rest_api_key):
            raise ValueError(
                "ONESIGNAL_APP_ID and ONESIGNAL_REST_API_KEY must both be provided to enable push"
            )
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.onesignal_app_id and self.onesignal_rest_api_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
