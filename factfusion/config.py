"""
Configuration settings for Fact Fusion.

Shared by the store service and the client core.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Settings
    app_name: str = "Fact Fusion"
    app_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./facts.db"
    seed_sample_facts: bool = False  # Insert the sample facts into an empty table

    # Listing
    max_facts: int = 1000  # Hard cap on rows returned by a single list call

    # API Security
    api_key: Optional[str] = None  # Shared service key, not a user identity
    allowed_origins: str = "http://localhost:8000,http://localhost:3000"

    # Client
    store_url: str = "http://localhost:8001/api"
    request_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "FF_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
