"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Both store URLs are required: Settings() fails fast if either is missing or blank
    - get_settings() is cached (lru_cache) — single instance per process
    - Customer and order stores never share a URL-derived engine

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - No defaults for store URLs: a missing connection string is a configuration error,
      not something to paper over with a local fallback
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Stores, one per entity family
    customer_database_url: str
    order_database_url: str

    @field_validator("customer_database_url", "order_database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Reject blank URLs; postgresql:// needs the asyncpg driver suffix."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("connection string cannot be empty")
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    static_dir: str = "static"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
