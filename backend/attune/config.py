"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - device_command_timeout_ms bounds every device adapter call

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: memory backend works with no database at all
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    store_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./attune.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_tables: bool = False

    # Decision engine
    collapse_seed: int | None = None

    # Device dispatch
    device_command_timeout_ms: int = 200
    device_command_max_retries: int = 1
    device_command_base_delay_ms: int = 25

    # History
    history_default_limit: int = 50
    history_max_limit: int = 500

    # Feature flags
    enable_environmental_orchestrator: bool = True
    enable_anchor_sync: bool = True

    # Demo: registers sample devices + "Focus Mode" for this user on startup
    seed_demo_user: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
