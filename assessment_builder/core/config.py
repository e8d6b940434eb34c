"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Assessment Template Builder"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./assessment_builder.db"
    db_echo: bool = False

    # Signed owner cookie (issued by the external identity provider)
    secret_key: str = "change-me-in-production-use-env"
    auth_cookie_name: str = "ab_auth"
    auth_token_max_age: int = 60 * 60 * 24 * 14  # 14 days

    # Defaults for new questions and for rows with null scale fields
    default_scale_min: int = 1
    default_scale_max: int = 5
    default_scale_variant: str = "number"

    # Template listing
    page_size: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
