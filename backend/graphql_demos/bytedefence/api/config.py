"""ByteDefence API Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a BYTEDEFENCE_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - notification_mode "Local" forwards to the relay; any other mode disables forwarding
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from graphql_demos.common.database import normalize_database_url


class Settings(BaseSettings):
    """ByteDefence API settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BYTEDEFENCE_", env_file=".env", extra="ignore", case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./bytedefence.db"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_schema: bool = True
    seed_demo_data: bool = True

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return normalize_database_url(v)

    # JWT
    jwt_secret: str = "dev-secret"
    jwt_issuer: str = "bytedefence-local"
    jwt_audience: str = "bytedefence-clients"
    jwt_expiry_minutes: int = 60
    jwt_clock_skew_seconds: int = 5

    # Notifications (Local | Azure | None)
    notification_mode: str = "Local"
    notification_hub_url: str = "http://localhost:5000"
    notification_access_key: str | None = None
    notification_timeout_seconds: float = 5.0

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
