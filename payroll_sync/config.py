"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Both services (oracle, imisanzu) read the same Settings class
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults work out-of-the-box with docker-compose (db, redis, oracle hostnames)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    service_name: str = "payroll-sync"

    # Database
    database_url: str = (
        "postgresql+asyncpg://payroll:payroll@db:5432/payroll"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Oracle master-data API (consumed by imisanzu)
    oracle_service_url: str = "http://oracle:3000"
    oracle_timeout_seconds: float = 5.0
    oracle_max_retries: int = 3

    @field_validator("oracle_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Redis (imisanzu contribution cache)
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    redis_max_retries: int = 3
    redis_socket_timeout_seconds: float = 5.0
    contributions_cache_ttl_seconds: int = 60

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
