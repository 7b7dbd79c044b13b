"""Package configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fbmessenger.constants import MAX_TEMPLATE_BUTTONS


class Settings(BaseSettings):
    """Settings loaded from FBMESSENGER_* environment variables."""

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        env_prefix="FBMESSENGER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["local", "staging", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for cloud logging"
    )

    # ==========================================================================
    # Button template limits
    # ==========================================================================
    # The platform rejects templates with more buttons than it supports.
    # Checking locally is opt-in.

    enforce_button_limit: bool = Field(
        default=False,
        description="Reject button templates with more than max_template_buttons",
    )
    max_template_buttons: int = Field(
        default=MAX_TEMPLATE_BUTTONS,
        ge=1,
        description="Maximum buttons per button template",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    mask_recipient_ids: bool = Field(
        default=True,
        description="Mask recipient ids and phone numbers in log attributes",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
