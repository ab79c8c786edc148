"""Library settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Codec configuration loaded from environment variables with BECH32_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="BECH32_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Logging ---
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Codec ---
    default_variant: str = "bech32"


@lru_cache
def get_settings() -> Settings:
    """Get cached codec settings."""
    return Settings()
