"""Relay Configuration — BYTEDEFENCE_RELAY_-prefixed settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BYTEDEFENCE_RELAY_", env_file=".env", extra="ignore", case_sensitive=False,
    )

    allowed_origins: list[str] = [
        "http://localhost:5001",
        "http://localhost:7071",
        "http://localhost:5000",
    ]
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
