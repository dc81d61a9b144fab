"""Runtime configuration for Stellar Nexus."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    DATABASE_URL: str = Field(
        default="sqlite:///stellar_nexus.db", description="SQLAlchemy database URL"
    )
    DATABASE_ECHO: bool = Field(default=False, description="Log every SQL statement")
    DATABASE_POOL_SIZE: int = Field(default=5, ge=1)
    DATABASE_MAX_OVERFLOW: int = Field(default=10, ge=0)
    DATABASE_POOL_RECYCLE: int = Field(default=1800, description="Seconds before reconnecting")
    DATABASE_POOL_TIMEOUT: int = Field(default=30, ge=1)

    market_refresh_interval_seconds: float = Field(
        default=3600.0,
        description="Seconds between NPC market price and stock refreshes",
        gt=0.0,
    )
    recipe_book_level: int = Field(
        default=5, description="Highest recipe level seeded on startup", ge=1, le=5
    )
    rng_seed: str | None = Field(
        default=None, description="Seed for every random stream; unset means nondeterministic"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
