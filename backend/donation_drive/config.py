"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - DATABASE_URL alone selects the storage backend; unset means storage disabled

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - No default database_url: a missing URL must be visible as a configuration error,
      not silently point at a local database
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosted Postgres hands out postgresql:// or postgres://; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5
    database_connect_timeout_seconds: int = 10
    mongo_database: str = "blood_donation"

    # Donor roster
    donors_default_limit: int = 10
    donors_max_limit: int = 1000

    # API
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"
    verbose_errors: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
