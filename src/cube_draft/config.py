"""Configuration management using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Card database service
    scryfall_api_url: str = Field(
        default="https://api.scryfall.com",
        description="Base URL of the Scryfall API",
    )
    user_agent: str = Field(
        default="cube-draft-kit/0.1",
        description="User-Agent header sent to the card database",
    )
    lookup_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for a single card collection request",
    )

    # Batched lookups
    lookup_batch_size: int = Field(
        default=25,
        ge=1,
        le=75,
        description="Card names per collection request (Scryfall caps at 75)",
    )
    lookup_max_batches: int = Field(
        default=2,
        ge=1,
        description="Maximum remote batches issued per metadata lookup",
    )
    lookup_batch_delay_seconds: float = Field(
        default=0.2,
        ge=0.15,
        description="Pause before each subsequent batch (rate limiting)",
    )

    # Theme profile cache
    theme_cache_ttl_seconds: int = Field(
        default=1800,
        ge=0,
        description="Theme profile cache TTL in seconds (0 disables expiry)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
