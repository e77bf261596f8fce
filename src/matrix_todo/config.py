"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from the environment (or ``.env``); names are case-insensitive."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # One signing secret per Slack app, shared by every user webhook
    slack_signing_secret: str = ""
    message_fetch_timeout: float = Field(default=10.0, gt=0)

    supabase_url: str = ""
    supabase_service_key: str = ""

    gemini_api_key: str = ""
    title_timeout: float = Field(default=15.0, gt=0)

    # Public origin Slack delivers to; webhook URLs are built from it
    app_base_url: str = "http://localhost:8080"
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    @field_validator("app_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings. Built on first call, never at import time."""
    return Settings()
