"""Send API request and response models.

A ``SendRequest`` is assembled from a recipient, a message body and an
optional notification type. Fields the platform treats as mutually
exclusive (user id vs. phone number, text vs. attachment) are modelled as
tagged unions, so a value can only ever hold one of them.

See https://developers.facebook.com/docs/messenger-platform/send-api-reference
"""

from enum import Enum
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from fbmessenger.constants import (
    ATTACHMENT_IMAGE,
    ATTACHMENT_TEMPLATE,
    BUTTON_POSTBACK,
    BUTTON_WEB_URL,
    NOTIFICATION_NO_PUSH,
    NOTIFICATION_REGULAR,
    NOTIFICATION_SILENT_PUSH,
    TEMPLATE_BUTTON,
)
from fbmessenger.errors import RemoteError


class NotificationType(str, Enum):
    """Push notification behaviour for a sent message."""

    REGULAR = NOTIFICATION_REGULAR
    SILENT_PUSH = NOTIFICATION_SILENT_PUSH
    NO_PUSH = NOTIFICATION_NO_PUSH


def _single_key_tag(
    *keys: str, allow_empty: bool = True
) -> Callable[[Any], str | None]:
    """Build a discriminator that tags a value by the one key it carries.

    Values carrying none or several of ``keys`` get no tag and fail
    validation with the discriminator's custom error. With
    ``allow_empty=False`` a lone key holding an empty string gets no tag
    either.
    """

    def discriminate(value: Any) -> str | None:
        if isinstance(value, dict):
            values = {key: value.get(key) for key in keys}
        else:
            values = {key: getattr(value, key, None) for key in keys}
        present = [key for key, item in values.items() if item is not None]
        if len(present) != 1:
            return None
        if not allow_empty and values[present[0]] == "":
            return None
        return present[0]

    return discriminate


# =============================================================================
# Recipient
# =============================================================================


class UserIdRecipient(BaseModel):
    """Recipient addressed by page-scoped user id."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str


class PhoneNumberRecipient(BaseModel):
    """Recipient addressed by phone number (requires the pages_messaging_phone_number permission)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phone_number: str


Recipient = Annotated[
    Union[
        Annotated[UserIdRecipient, Tag("id")],
        Annotated[PhoneNumberRecipient, Tag("phone_number")],
    ],
    Discriminator(
        _single_key_tag("id", "phone_number", allow_empty=False),
        custom_error_type="recipient_identifier",
        custom_error_message="exactly one non-empty id or phone_number is required",
    ),
]


# =============================================================================
# Attachments
# =============================================================================


class MediaPayload(BaseModel):
    """URL of media attached to a message.

    See https://developers.facebook.com/docs/messenger-platform/send-api-reference/image-attachment
    """

    model_config = ConfigDict(frozen=True)

    url: str


class UrlButton(BaseModel):
    """Button that opens a URL in the Messenger webview."""

    model_config = ConfigDict(frozen=True)

    type: Literal["web_url"] = BUTTON_WEB_URL
    title: str
    url: str


class PostbackButton(BaseModel):
    """Button that sends ``payload`` back to the webhook, or dials it for call buttons."""

    model_config = ConfigDict(frozen=True)

    type: Literal["postback", "phone_number"] = BUTTON_POSTBACK
    title: str
    payload: str


Button = Annotated[Union[UrlButton, PostbackButton], Field(discriminator="type")]

# Attachment types sharing the url-only MediaPayload
MediaType = Literal["image", "audio", "video", "file"]


class ButtonPayload(BaseModel):
    """Structured message built with the button template.

    Buttons are kept in presentation order.

    See https://developers.facebook.com/docs/messenger-platform/send-api-reference/button-template
    """

    model_config = ConfigDict(frozen=True)

    template_type: Literal["button"] = TEMPLATE_BUTTON
    text: str
    buttons: tuple[Button, ...] = ()


class MediaAttachment(BaseModel):
    """Image, audio, video or file attachment."""

    model_config = ConfigDict(frozen=True)

    type: MediaType = ATTACHMENT_IMAGE
    payload: MediaPayload


class TemplateAttachment(BaseModel):
    """Structured message attachment."""

    model_config = ConfigDict(frozen=True)

    type: Literal["template"] = ATTACHMENT_TEMPLATE
    payload: ButtonPayload


Attachment = Annotated[
    Union[MediaAttachment, TemplateAttachment], Field(discriminator="type")
]


# =============================================================================
# Message body
# =============================================================================


class TextBody(BaseModel):
    """Plain text message."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str


class AttachmentBody(BaseModel):
    """Message carrying an attachment instead of text."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    attachment: Attachment


MessageBody = Annotated[
    Union[
        Annotated[TextBody, Tag("text")],
        Annotated[AttachmentBody, Tag("attachment")],
    ],
    Discriminator(
        _single_key_tag("text", "attachment"),
        custom_error_type="message_body",
        custom_error_message="exactly one of text or attachment is required",
    ),
]


# =============================================================================
# Request
# =============================================================================


class SendRequest(BaseModel):
    """Top level structure for any message to send.

    ``recipient`` and ``message`` may be left unset while the request is being
    assembled; the codec rejects them as missing when the request is encoded.
    The fluent setters return a new request and leave the receiver untouched:

        >>> request = text_message("hi").to("1234").silent_push()

    See https://developers.facebook.com/docs/messenger-platform/send-api-reference#request
    """

    model_config = ConfigDict(frozen=True)

    recipient: Optional[Recipient] = None
    message: Optional[MessageBody] = None
    notification_type: NotificationType | None = None

    @property
    def text(self) -> str | None:
        """Message text, or None when the message carries an attachment."""
        if isinstance(self.message, TextBody):
            return self.message.text
        return None

    @property
    def attachment(self) -> MediaAttachment | TemplateAttachment | None:
        """Message attachment, or None for text messages."""
        if isinstance(self.message, AttachmentBody):
            return self.message.attachment
        return None

    def to(self, user_id: str) -> "SendRequest":
        """Address the request to a page-scoped user id."""
        return self.model_copy(update={"recipient": UserIdRecipient(id=user_id)})

    def to_phone_number(self, phone_number: str) -> "SendRequest":
        """Address the request to a phone number."""
        return self.model_copy(
            update={"recipient": PhoneNumberRecipient(phone_number=phone_number)}
        )

    def regular(self) -> "SendRequest":
        """Send with a regular push notification."""
        return self._notify(NotificationType.REGULAR)

    def silent_push(self) -> "SendRequest":
        """Send with an on-screen notification only."""
        return self._notify(NotificationType.SILENT_PUSH)

    def no_push(self) -> "SendRequest":
        """Send without any notification."""
        return self._notify(NotificationType.NO_PUSH)

    def _notify(self, notification_type: NotificationType) -> "SendRequest":
        return self.model_copy(update={"notification_type": notification_type})


# =============================================================================
# Response
# =============================================================================


class SendError(BaseModel):
    """Error object returned by the Send API.

    See https://developers.facebook.com/docs/messenger-platform/send-api-reference#errors
    """

    model_config = ConfigDict(frozen=True)

    message: str
    type: str
    code: int
    error_subcode: int | None = None
    error_data: Any = None
    fbtrace_id: str

    def to_exception(self) -> RemoteError:
        """Build the RemoteError carrying these fields unchanged."""
        return RemoteError(
            message=self.message,
            type=self.type,
            code=self.code,
            fbtrace_id=self.fbtrace_id,
            error_data=self.error_data,
            error_subcode=self.error_subcode,
        )


class SendResponse(BaseModel):
    """Result of sending a SendRequest.

    Either the ids or ``error`` are populated, never both in practice.

    See https://developers.facebook.com/docs/messenger-platform/send-api-reference#response
    """

    model_config = ConfigDict(frozen=True)

    recipient_id: str | None = None
    message_id: str | None = None
    error: SendError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> "SendResponse":
        """Raise the embedded error as RemoteError, otherwise return self."""
        if self.error is not None:
            raise self.error.to_exception()
        return self
