"""Tests for structured logging with Logfire."""

from unittest.mock import patch

import pytest

from fbmessenger.errors import RemoteError, ValidationError
from fbmessenger.logging_config import loggable_id, mask_pii, setup_logfire
from fbmessenger.services.codec import (
    decode_callback,
    decode_send_response,
    encode_send_request,
)
from fbmessenger.services.message_builder import text_message


def test_encode_logs_masked_recipient(logfire_capture, mock_settings):
    """Test that encoding logs the request with a masked recipient."""
    encode_send_request(text_message("hi").to_phone_number("+15551234567").no_push())

    encode_logs = [log for log in logfire_capture if log[1][0] == "Encoded send request"]
    assert len(encode_logs) == 1

    log_type, args, kwargs = encode_logs[0]
    assert log_type == "info"
    assert kwargs["recipient"] == "+1********67"
    assert kwargs["message_kind"] == "text"
    assert kwargs["notification_type"] == "NO_PUSH"


def test_unmasked_recipient_when_disabled(logfire_capture, mock_settings):
    """Test that masking can be switched off."""
    mock_settings.mask_recipient_ids = False
    encode_send_request(text_message("hi").to("user-123"))

    _, _, kwargs = next(
        log for log in logfire_capture if log[1][0] == "Encoded send request"
    )
    assert kwargs["recipient"] == "user-123"


def test_missing_field_logs_warning(logfire_capture):
    """Test that validation failures are logged at warn level."""
    with pytest.raises(ValidationError):
        encode_send_request(text_message("hi"))

    warnings = [log for log in logfire_capture if log[0] == "warn"]
    assert len(warnings) == 1
    assert warnings[0][2]["field"] == "recipient"
    assert warnings[0][2]["payload"] == "send_request"


def test_remote_error_logged(logfire_capture, sample_send_error_body):
    """Test that remote errors are logged with code and trace id."""
    with pytest.raises(RemoteError):
        decode_send_response(sample_send_error_body)

    errors = [log for log in logfire_capture if log[0] == "error"]
    assert len(errors) == 1
    assert errors[0][2]["code"] == 190
    assert errors[0][2]["fbtrace_id"] == "BLBz/WZt8dN"


def test_decode_callback_logs_counts(logfire_capture, sample_mixed_callback):
    """Test that callback decoding logs entry and messaging counts."""
    decode_callback(sample_mixed_callback)

    _, _, kwargs = next(
        log for log in logfire_capture if log[1][0] == "Decoded webhook callback"
    )
    assert kwargs["object"] == "page"
    assert kwargs["entry_count"] == 2
    assert kwargs["messaging_count"] == 4


class TestMaskPii:
    """Test mask_pii() and loggable_id()."""

    def test_masks_middle(self):
        assert mask_pii("1234567890") == "12******90"

    def test_short_values_fully_masked(self):
        assert mask_pii("abcd") == "****"

    def test_empty(self):
        assert mask_pii(None) == ""
        assert mask_pii("") == ""

    def test_loggable_id_masks_by_default(self, mock_settings):
        assert loggable_id("user-123") == "us****23"


class TestSetupLogfire:
    """Test setup_logfire()."""

    def test_configures_logfire(self, mock_settings):
        """Test that Logfire is configured for the environment."""
        with (
            patch("fbmessenger.logging_config.logfire.configure") as configure,
            patch("fbmessenger.logging_config.logfire.instrument_pydantic") as instrument,
        ):
            setup_logfire()

        configure.assert_called_once_with(environment="local")
        instrument.assert_called_once()

    def test_passes_token(self, mock_settings):
        """Test that the cloud token is forwarded when set."""
        mock_settings.logfire_token = "lf-token"
        with (
            patch("fbmessenger.logging_config.logfire.configure") as configure,
            patch("fbmessenger.logging_config.logfire.instrument_pydantic"),
        ):
            setup_logfire()

        configure.assert_called_once_with(environment="local", token="lf-token")
