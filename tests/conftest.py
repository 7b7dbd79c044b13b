"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Sample wire payloads: sample_text_callback, sample_send_error_body, ...
2. Infrastructure: mock_settings, logfire_capture
"""

import os
from unittest.mock import patch

import logfire
import pytest

from fbmessenger.config import Settings, get_settings

# Suppress warnings when logfire isn't configured in tests
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")


@pytest.fixture
def mock_settings(monkeypatch):
    """Settings with the button limit enforced and id masking on."""
    get_settings.cache_clear()
    settings = Settings(
        env="local",
        logfire_token=None,
        enforce_button_limit=True,
        max_template_buttons=3,
        mask_recipient_ids=True,
    )

    monkeypatch.setattr("fbmessenger.config.get_settings", lambda: settings)
    # Patch where get_settings is used so call sites see the mock
    monkeypatch.setattr(
        "fbmessenger.services.message_builder.get_settings", lambda: settings
    )
    monkeypatch.setattr("fbmessenger.logging_config.get_settings", lambda: settings)
    return settings


@pytest.fixture
def sample_text_callback():
    """Webhook body carrying one text message."""
    return {
        "object": "page",
        "entry": [
            {
                "id": "page-123",
                "time": 1458692752478,
                "messaging": [
                    {
                        "sender": {"id": "user-456"},
                        "recipient": {"id": "page-123"},
                        "timestamp": 1458692752478,
                        "message": {
                            "mid": "mid.1457764197618:41d102a3e1ae206a38",
                            "seq": 73,
                            "text": "hello, world!",
                        },
                    }
                ],
            }
        ],
    }


@pytest.fixture
def sample_mixed_callback():
    """Webhook body with one of each interaction kind across two entries."""
    return {
        "object": "page",
        "entry": [
            {
                "id": "page-123",
                "time": 1458692752478,
                "messaging": [
                    {
                        "sender": {"id": "user-456"},
                        "recipient": {"id": "page-123"},
                        "timestamp": 1458692752478,
                        "message": {
                            "mid": "mid.1",
                            "seq": 1,
                            "attachments": [
                                {
                                    "type": "image",
                                    "payload": {"url": "https://cdn.example.com/a.jpg"},
                                },
                                {
                                    "type": "location",
                                    "payload": {
                                        "coordinates": {"lat": 52.52, "long": 13.405}
                                    },
                                },
                            ],
                        },
                    },
                    {
                        "sender": {"id": "user-456"},
                        "recipient": {"id": "page-123"},
                        "delivery": {
                            "mids": ["mid.1458668856218:ed81099e15d3f4f233"],
                            "watermark": 1458668856253,
                            "seq": 37,
                        },
                    },
                ],
            },
            {
                "id": "page-123",
                "time": 1458692752999,
                "messaging": [
                    {
                        "sender": {"id": "user-789"},
                        "recipient": {"id": "page-123"},
                        "timestamp": 1458692752999,
                        "postback": {"payload": "USER_DEFINED_PAYLOAD", "title": "Yes"},
                    },
                    {
                        "sender": {"id": "user-789"},
                        "recipient": {"id": "page-123"},
                        "timestamp": 1234567890,
                        "optin": {"ref": "PASS_THROUGH_PARAM"},
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_send_error_body():
    """Send API error response."""
    return {
        "error": {
            "message": "Invalid OAuth access token.",
            "type": "OAuthException",
            "code": 190,
            "error_data": "",
            "fbtrace_id": "BLBz/WZt8dN",
        }
    }


@pytest.fixture
def sample_user_profile_body():
    """User Profile API response."""
    return {
        "first_name": "Peter",
        "last_name": "Chang",
        "profile_pic": "https://fbcdn-profile-a.akamaihd.net/hprofile.jpg",
        "locale": "en_US",
        "timezone": -7,
        "gender": "male",
    }


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    original_info = logfire.info
    original_warn = logfire.warn
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_warn(*args, **kwargs):
        captured_logs.append(("warn", args, kwargs))
        return original_warn(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.warn", side_effect=capture_warn),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs
