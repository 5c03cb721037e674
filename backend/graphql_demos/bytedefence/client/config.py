"""Client Configuration — BYTEDEFENCE_CLIENT_-prefixed settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BYTEDEFENCE_CLIENT_", env_file=".env", extra="ignore", case_sensitive=False,
    )

    api_url: str = "http://localhost:7071/api/"
    graphql_url: str | None = None
    token_file: str | None = None
    timeout_seconds: float = 10.0
    hub_url: str = "http://localhost:5000/hubs/notifications"

    @property
    def graphql_endpoint(self) -> str:
        return self.graphql_url or f"{self.api_url.rstrip('/')}/graphql"


@lru_cache
def get_settings() -> Settings:
    return Settings()
