"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets and endpoints come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - provider selects exactly one backend implementation for the process lifetime

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Provider
    provider: Literal["local", "remote"] = "local"

    # Database (local provider)
    database_url: str = (
        "postgresql+asyncpg://meshery:meshery@db:5432/meshery"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Create missing tables on startup; disable when alembic owns the schema
    database_auto_create: bool = True

    # Remote provider
    remote_provider_url: str = "https://meshery.layer5.io"
    remote_provider_timeout_seconds: float = 30.0

    # GitHub import
    github_raw_base_url: str = "https://raw.githubusercontent.com"
    github_default_branch: str = "master"
    github_timeout_seconds: float = 15.0

    # Identity used when the caller sends none
    local_user_id: str = "meshery"
    local_username: str = "meshery"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
