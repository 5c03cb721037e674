"""BookStore Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a BOOKSTORE_-prefixed environment variable
    - get_settings() is cached (lru_cache) — single instance per process
    - Defaults work out-of-the-box against a local SQLite file
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from graphql_demos.common.database import normalize_database_url


class Settings(BaseSettings):
    """BookStore API settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_", env_file=".env", extra="ignore", case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./bookstore.db"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_schema: bool = True
    seed_demo_data: bool = True

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return normalize_database_url(v)

    # Auth
    jwt_secret: str = "BookStoreApiSecretKeyForDemoPurposes2024!MustBeAtLeast32Chars"
    jwt_issuer: str = "BookStoreApi"
    jwt_audience: str = "BookStoreClient"
    jwt_lifetime_seconds: int = 3600
    static_demo_token: str = "demo-bearer-token-2024"

    # API
    cors_origins: list[str] = ["*"]
    graphiql: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
