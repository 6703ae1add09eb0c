"""Configuration settings for the relay."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


class ServerSettings(EnvSettings):
    # None means: bind the first non-loopback IPv4 address.
    host: Optional[str] = Field(None, validation_alias="RELAY_HOST")
    port: int = Field(9094, validation_alias="GOTIFY_PORT")


class GotifySettings(EnvSettings):
    url: Optional[str] = Field(None, validation_alias="GOTIFY_ALERT_URL")


class Settings(EnvSettings):
    """Global Application Settings."""
    server: ServerSettings = Field(default_factory=ServerSettings)
    gotify: GotifySettings = Field(default_factory=GotifySettings)

    environment: str = Field("development", validation_alias="RELAY_ENVIRONMENT")
    log_level: str = Field("INFO", validation_alias="RELAY_LOG_LEVEL")
    # 0 keeps the per-batch fan-out unbounded.
    max_concurrency: int = Field(0, ge=0, validation_alias="RELAY_MAX_CONCURRENCY")


settings = Settings()
