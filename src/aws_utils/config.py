"""
Library configuration with environment-driven settings.

Every value can be overridden through an ``AWS_UTILS_`` prefixed environment
variable or a local ``.env`` file.
"""

from functools import lru_cache
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings shared by the record store, message channel and publisher."""

    model_config = SettingsConfigDict(
        env_prefix="AWS_UTILS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS
    region: str = Field(
        default="eu-west-2",
        description="AWS region used when a component is built without one",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint, e.g. a local AWS emulator",
    )

    # Logging
    log_level: str = "INFO"

    # Record store
    expiry_attribute: str = Field(
        default="expiry_date",
        description="Item attribute holding the epoch-seconds expiry",
    )

    # Message channel
    receive_max_messages: int = Field(
        default=10,
        ge=1,
        le=10,
        description="Default cap for a single receive request",
    )

    @field_validator("endpoint_url", mode="before")
    @classmethod
    def empty_endpoint_is_none(cls, v: str | None) -> str | None:
        """Treat an empty AWS_UTILS_ENDPOINT_URL as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def _get_settings_cached() -> Settings:
    return Settings()


def get_settings() -> Settings:
    # Under pytest env vars are monkeypatched per test: don't hand out a frozen instance.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    return _get_settings_cached()
