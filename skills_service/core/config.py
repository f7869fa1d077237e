"""Application settings loaded from the environment (and an optional .env file)."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the skills service."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "skills-service"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Upper bound for the message attached to a self-reported skill event
    MAX_SELF_REPORT_MESSAGE_LENGTH: int = Field(default=500, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance (cached)."""
    return Settings()
