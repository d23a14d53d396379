"""Storefront Configuration"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False

    # Remote services
    api_base_url: str = "http://localhost:8001"
    products_path: str = "/products"
    purchases_path: str = "/purchases"
    request_timeout: float = 30.0

    # Local persistence
    storage_path: str = ".storefront/state.json"
    inventory_cache_key: str = "products-storage"
    orders_cache_key: str = "purchase-storage"

    # Checkout
    confirmation_timeout: float = 5.0

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the storefront"""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
