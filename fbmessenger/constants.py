"""Messenger Platform wire constants.

This module centralizes the fixed strings and limits of the Send API and
webhook payloads so models, builders and the codec share a single source
of truth.
"""

# =============================================================================
# Send API: notification types
# =============================================================================

NOTIFICATION_REGULAR = "REGULAR"
NOTIFICATION_SILENT_PUSH = "SILENT_PUSH"
NOTIFICATION_NO_PUSH = "NO_PUSH"

# =============================================================================
# Send API: attachment and template type tags
# =============================================================================

ATTACHMENT_IMAGE = "image"
ATTACHMENT_TEMPLATE = "template"

TEMPLATE_BUTTON = "button"

# =============================================================================
# Send API: button type tags
# =============================================================================

BUTTON_WEB_URL = "web_url"
BUTTON_POSTBACK = "postback"
BUTTON_PHONE_NUMBER = "phone_number"

# Platform cap on buttons in a button template. Only enforced locally when
# Settings.enforce_button_limit is enabled.
MAX_TEMPLATE_BUTTONS = 3

# =============================================================================
# Webhook
# =============================================================================

# Object tag of callbacks delivered for Facebook Pages
CALLBACK_OBJECT_PAGE = "page"
