"""
Shared configuration management for the token issuer.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TokenConfig(BaseSettings):
    """Configuration with environment overrides (``TOKENS_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="TOKENS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Token defaults
    default_ttl: int = Field(default=900, description="Seconds from issue to expiry (15 minutes)")


@lru_cache()
def get_config() -> TokenConfig:
    """Get the process-wide configuration."""
    return TokenConfig()
