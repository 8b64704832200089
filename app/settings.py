from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Infra
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"
    http_timeout_seconds: float = 10.0

    # Storefront platform
    shop_domain: str = "example.myshopify.com"
    shop_access_token: str | None = None
    shop_api_version: str = "2024-01"
    multipass_secret: str | None = None

    # Security / policies
    code_ttl_seconds: int = 600
    session_ttl_seconds: int = 86400

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
