"""Service Settings — everything the OrderItem API reads from its environment.

Invariants:
    - DATABASE_URL always reaches SQLAlchemy with an async driver (postgresql+asyncpg)
    - default_page_limit never exceeds max_page_limit
    - log_format is "json" or "text"
    - get_settings() returns one Settings per process (lru_cache)

Design Decisions:
    - Every field has a local default so `uvicorn order_api.main:app` runs against docker-compose
    - Identity is a header name, not a secret: the gateway in front authenticates
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMATS = ("json", "text")


def async_database_url(url: str) -> str:
    """Rewrite a postgresql:// URL to the asyncpg dialect; other URLs pass through."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """OrderItem API settings, one field per environment variable."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Document store
    database_url: str = "postgresql+asyncpg://orders:orders@db:5432/orders"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # HTTP surface
    cors_origins: list[str] = ["http://localhost:5173"]
    identity_header: str = "X-User-Id"

    # /list paging
    default_page_limit: int = 10
    max_page_limit: int = 500

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        return async_database_url(v) if isinstance(v, str) else v

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return v

    @model_validator(mode="after")
    def page_limits_ordered(self) -> "Settings":
        if self.default_page_limit < 1 or self.default_page_limit > self.max_page_limit:
            raise ValueError("default_page_limit must be between 1 and max_page_limit")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
