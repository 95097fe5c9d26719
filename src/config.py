"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Bookshelf API"
    debug: bool = False

    # Backing store
    store_backend: Literal["memory", "redis"] = "memory"
    store_reconnect_interval: float = 5.0  # seconds between reconnect attempts

    # Redis document store
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "books"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
