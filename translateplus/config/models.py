"""Immutable per-client configuration."""

from dataclasses import dataclass

from translateplus.config.settings import DEFAULT_BASE_URL, get_settings
from translateplus.errors import TranslatePlusError


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    max_retries: int = 3
    max_concurrent: int = 5

    def __post_init__(self):
        if not self.api_key:
            raise TranslatePlusError.validation("API key is required")
        if self.timeout <= 0:
            raise TranslatePlusError.validation("timeout must be positive")
        if self.max_retries < 0:
            raise TranslatePlusError.validation("max_retries must be >= 0")
        if self.max_concurrent < 1:
            raise TranslatePlusError.validation("max_concurrent must be >= 1")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_settings(cls, **overrides) -> "ClientConfig":
        """Build a config from environment settings.

        Keyword overrides that are None fall back to the settings value,
        so callers can forward optional arguments unchanged.
        """
        settings = get_settings()
        values = {
            "api_key": settings.api_key,
            "base_url": settings.base_url,
            "timeout": settings.timeout,
            "max_retries": settings.max_retries,
            "max_concurrent": settings.max_concurrent,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
