"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

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
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp and compare notification timestamps",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    admin_user_ids: str = Field(
        default="",
        description="Comma separated user ids allowed to query across users",
    )
    digest_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Hour of day (app timezone) when daily and weekly digests are released",
    )
    event_channels: str = Field(
        default="in_app,email",
        description="Comma separated channels notified for incoming domain events",
    )
    sweep_batch_size: int = Field(
        default=500,
        gt=0,
        description="Maximum number of scheduled notifications processed per sweep",
    )
    default_page_limit: int = Field(default=20, gt=0)
    max_page_limit: int = Field(default=100, gt=0)
    cors_origins: str = Field(
        default="http://localhost:4200",
        description="Comma separated origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def admin_user_id_set(self) -> frozenset[str]:
        return frozenset(_split_csv(self.admin_user_ids))

    @property
    def event_channel_list(self) -> list[str]:
        return _split_csv(self.event_channels)

    @property
    def cors_origin_list(self) -> list[str]:
        return _split_csv(self.cors_origins)


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
