"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire

from fbmessenger.config import get_settings


def setup_logfire() -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - Pydantic instrumentation (model validation logging)
    - Environment-aware configuration
    - Structured logging for non-local environments
    """
    settings = get_settings()

    logfire_config: dict[str, Any] = {
        "environment": settings.env,
    }

    # Add token if provided (for cloud logging)
    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)
    logfire.instrument_pydantic()

    log_level = settings.log_level.upper()

    if settings.env == "local":
        # Local: Console formatting for development
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(message)s",  # Logfire handles structured formatting
        )


def mask_pii(value: str | None, mask_char: str = "*") -> str:
    """
    Mask potentially sensitive data in logs.

    Args:
        value: Value to mask
        mask_char: Character to use for masking

    Returns:
        Masked string
    """
    if not value:
        return ""

    if len(value) <= 4:
        return mask_char * len(value)

    # Show first 2 and last 2 characters, mask the rest
    return f"{value[:2]}{mask_char * (len(value) - 4)}{value[-2:]}"


def loggable_id(value: str | None) -> str:
    """Return a recipient identifier as it may appear in log attributes."""
    if get_settings().mask_recipient_ids:
        return mask_pii(value)
    return value or ""
