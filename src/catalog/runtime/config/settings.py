from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] | None = Field(
        default=None, validation_alias="APP_ENVIRONMENT"
    )
    log_level: str | None = Field(default=None, validation_alias="LOG_LEVEL")

    # Infrastructure URLs
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    def overrides(self) -> dict[str, dict[str, str]]:
        """Return the explicitly provided values as a nested config patch."""
        patch: dict[str, dict[str, str]] = {}
        if self.environment:
            patch.setdefault("app", {})["environment"] = self.environment
        if self.log_level:
            patch.setdefault("logging", {})["level"] = self.log_level
        if self.database_url:
            patch.setdefault("database", {})["url"] = self.database_url
        return patch
