"""
Shared configuration management for the edge configuration API client.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings, read from the environment (``EDGE_*``) or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="EDGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Vendor endpoint
    base_url: str = Field(default="https://localhost")
    timeout: float = Field(default=10.0, gt=0)
    use_prefixes: bool = Field(default=False)
    account_switch_key: Optional[str] = Field(default=None)

    # Transport retry (connection failures and timeouts only)
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_base_delay: float = Field(default=0.5, ge=0)
    retry_max_delay: float = Field(default=5.0, ge=0)

    # Rule tree validation policy
    exempt_container_rules: bool = Field(default=False)


def get_config(**overrides) -> Settings:
    """Build settings, letting explicit keyword overrides win over the environment."""
    return Settings(**overrides)
