"""Harvest Direct Configuration"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Harvest Direct"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    # Cart
    session_header: str = "X-Session-Id"
    shipping_fee: float = 5.99
    cart_ttl_seconds: int = 60 * 60 * 24
    cart_purge_interval_seconds: int = 300

    # Inventory
    low_stock_threshold: int = 20

    # JWT
    jwt_secret: str = "harvest-direct-dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = 60 * 24
    admin_auth_enabled: bool = True

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
