"""
Pydantic-based configuration settings for the Guardian SDK.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from guardian.networking.request_factory import DEFAULT_USER_AGENT


class GuardianSettings(BaseSettings):
    """
    Configuration for a Guardian client.

    Configuration can be provided via:
    - Environment variables with GUARDIAN_ prefix
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        # From environment (GUARDIAN_BASE_URL=https://tenant.guardian.auth0.com/)
        settings = GuardianSettings()

        # Direct configuration
        settings = GuardianSettings(base_url="https://tenant.guardian.auth0.com/", timeout_seconds=10)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="GUARDIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str | None = None
    timeout_seconds: float | None = Field(default=None, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_http_bodies: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return self.model_dump()


@lru_cache
def get_settings(env_file: str | None = None) -> GuardianSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return GuardianSettings(_env_file=env_file)

    for env_path in [".env", ".env.local"]:
        if Path(env_path).exists():
            return GuardianSettings(_env_file=env_path)

    return GuardianSettings()
