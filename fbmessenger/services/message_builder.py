"""Constructor helpers for outbound messages and buttons.

Each helper returns a SendRequest with only the message populated. Address
it and pick a notification type with the fluent setters:

    >>> button_template_message(
    ...     "Pick one",
    ...     postback_button("Yes", "ANSWER_YES"),
    ...     url_button("Docs", "https://example.com"),
    ... ).to("1234").no_push()
"""

import logfire

from fbmessenger.config import get_settings
from fbmessenger.constants import (
    ATTACHMENT_IMAGE,
    ATTACHMENT_TEMPLATE,
    BUTTON_PHONE_NUMBER,
    BUTTON_POSTBACK,
    BUTTON_WEB_URL,
)
from fbmessenger.errors import ValidationError
from fbmessenger.models.send import (
    AttachmentBody,
    ButtonPayload,
    MediaAttachment,
    MediaPayload,
    MediaType,
    PostbackButton,
    SendRequest,
    TemplateAttachment,
    TextBody,
    UrlButton,
)


def text_message(text: str) -> SendRequest:
    """Create a SendRequest containing a text message."""
    return SendRequest(message=TextBody(text=text))


def media_message(media_type: MediaType, url: str) -> SendRequest:
    """Create a SendRequest with an image, audio, video or file attachment."""
    attachment = MediaAttachment(type=media_type, payload=MediaPayload(url=url))
    return SendRequest(message=AttachmentBody(attachment=attachment))


def image_message(url: str) -> SendRequest:
    """Create a SendRequest containing an image attachment."""
    return media_message(ATTACHMENT_IMAGE, url)


def button_template_message(
    text: str, *buttons: UrlButton | PostbackButton
) -> SendRequest:
    """
    Create a SendRequest with text and buttons requesting input from the user.

    Buttons are presented in the order given. The platform accepts at most
    three; that cap is only checked here when ``enforce_button_limit`` is set.

    Raises:
        ValidationError: Too many buttons while the limit is enforced
    """
    settings = get_settings()
    if settings.enforce_button_limit and len(buttons) > settings.max_template_buttons:
        logfire.warn(
            "Button template exceeds button limit",
            button_count=len(buttons),
            max_buttons=settings.max_template_buttons,
        )
        raise ValidationError(
            "message.attachment.payload.buttons",
            f"at most {settings.max_template_buttons} buttons allowed, got {len(buttons)}",
        )

    attachment = TemplateAttachment(
        type=ATTACHMENT_TEMPLATE,
        payload=ButtonPayload(text=text, buttons=buttons),
    )
    return SendRequest(message=AttachmentBody(attachment=attachment))


def url_button(title: str, url: str) -> UrlButton:
    """Button opening ``url``."""
    return UrlButton(type=BUTTON_WEB_URL, title=title, url=url)


def postback_button(title: str, payload: str) -> PostbackButton:
    """Button delivering ``payload`` to the webhook as a Postback."""
    return PostbackButton(type=BUTTON_POSTBACK, title=title, payload=payload)


def call_button(title: str, phone_number: str) -> PostbackButton:
    """Button dialing ``phone_number`` (in +E.164 format)."""
    return PostbackButton(type=BUTTON_PHONE_NUMBER, title=title, payload=phone_number)
