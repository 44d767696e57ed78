"""
Configuration settings for LogiTrack API
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class AppSettings(BaseSettings):
    """Impostazioni applicative lette da ambiente / .env"""

    app_name: str = Field(default="LogiTrack API", env="APP_NAME")

    # Database
    database_url: str = Field(default="sqlite:///./logitrack.db", env="DATABASE_URL")
    database_echo: bool = Field(default=False, env="DATABASE_ECHO")

    # Auth
    secret_key: str = Field(default="change-me-in-production", env="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", env="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24, env="ACCESS_TOKEN_EXPIRE_MINUTES")
    allow_signup: bool = Field(default=True, env="ALLOW_SIGNUP")
    admin_email: str = Field(default="", env="ADMIN_EMAIL")
    admin_password: str = Field(default="", env="ADMIN_PASSWORD")

    # Document storage
    document_storage_root: str = Field(default="media/documents", env="DOCUMENT_STORAGE_ROOT")
    document_public_base_url: str = Field(default="/media/documents", env="DOCUMENT_PUBLIC_BASE_URL")
    document_max_size: int = Field(default=20 * 1024 * 1024, env="DOCUMENT_MAX_SIZE")  # 20MB

    # Presentation
    default_locale: str = Field(default="pt-PT", env="DEFAULT_LOCALE")
    cors_origins: List[str] = Field(default=["http://localhost:5173", "http://localhost:8080"], env="CORS_ORIGINS")

    # Pagination
    limit_default: int = Field(default=20, env="LIMIT_DEFAULT")
    max_limit: int = Field(default=500, env="MAX_LIMIT")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get cached application settings instance"""
    return AppSettings()


class CacheSettings(BaseSettings):
    """Cache configuration settings"""

    cache_enabled: bool = Field(default=True, env="CACHE_ENABLED")
    cache_backend: str = Field(default="memory", env="CACHE_BACKEND")  # redis, memory, hybrid

    # Redis configuration
    redis_url: str = Field(default="redis://localhost:6379/0", env="REDIS_URL")
    redis_max_connections: int = Field(default=20, env="REDIS_MAX_CONNECTIONS")
    redis_retry_on_timeout: bool = Field(default=True, env="REDIS_RETRY_ON_TIMEOUT")

    # TTL defaults (in seconds)
    cache_default_ttl: int = Field(default=300, env="CACHE_DEFAULT_TTL")

    # Memory cache configuration
    cache_max_mem_items: int = Field(default=1000, env="CACHE_MAX_MEM_ITEMS")
    cache_max_value_size: int = Field(default=1048576, env="CACHE_MAX_VALUE_SIZE")  # 1MB

    cache_key_salt: str = Field(default="logitrack-cache", env="CACHE_KEY_SALT")

    # Circuit breaker
    cache_error_threshold: float = Field(default=0.5, env="CACHE_ERROR_THRESHOLD")
    cache_recovery_timeout: int = Field(default=300, env="CACHE_RECOVERY_TIMEOUT")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings instance"""
    return CacheSettings()


# TTL presets for different data types
TTL_PRESETS = {
    # Reference data
    "suppliers_list": 300,      # 5 minutes
    "carriers_list": 300,
    "destinations_list": 300,
    "container_types": 86400,   # 24 hours
    "form_options": 300,

    # Orders
    "orders_list": 30,          # 30 seconds
    "order": 120,               # 2 minutes

    # Aggregates
    "dashboard": 60,            # 1 minute
}
