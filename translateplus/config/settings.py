"""Client settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "1.0.0"
DEFAULT_BASE_URL = "https://api.translateplus.io"


class Settings(BaseSettings):
    # Credentials
    api_key: str = ""

    # Transport
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0  # Seconds per HTTP attempt
    max_retries: int = 3  # Retries for connection-level failures only
    max_concurrent: int = 5  # In-flight requests per client instance

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty = stdout only

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATEPLUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
