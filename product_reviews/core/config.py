# product_reviews/core/config.py

import os
from functools import lru_cache
from typing import Optional
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./product_reviews.db"

    # Shopify Admin API
    SHOPIFY_API_VERSION: str = "2025-04"
    SHOPIFY_REQUEST_TIMEOUT: float = 10.0
    # App secret; when set, app-proxy requests must carry a valid signature
    SHOPIFY_API_SECRET: Optional[str] = None
    PRODUCTS_PER_PAGE: int = 10

    # Storefront origins allowed to read reviews directly
    CORS_ALLOW_ORIGINS: str = "*"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        # Convert postgresql:// to postgresql+asyncpg:// for async support
        if value.startswith("postgresql://"):
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_origins(self):
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()


def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
