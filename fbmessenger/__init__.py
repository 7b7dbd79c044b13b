"""Facebook Messenger Platform request, response and webhook models."""

from fbmessenger.errors import MessengerError, RemoteError, ValidationError
from fbmessenger.models.callback import (
    Callback,
    CallbackAttachment,
    CallbackMessage,
    Delivery,
    Entry,
    MessagingEntry,
    MessagingKind,
    OptIn,
    Postback,
    Principal,
)
from fbmessenger.models.send import (
    ButtonPayload,
    MediaAttachment,
    MediaPayload,
    NotificationType,
    PhoneNumberRecipient,
    PostbackButton,
    SendError,
    SendRequest,
    SendResponse,
    TemplateAttachment,
    UrlButton,
    UserIdRecipient,
)
from fbmessenger.models.user_models import UserProfile
from fbmessenger.services.codec import (
    decode_callback,
    decode_send_request,
    decode_send_response,
    decode_user_profile,
    encode_callback,
    encode_send_request,
)
from fbmessenger.services.message_builder import (
    button_template_message,
    call_button,
    image_message,
    media_message,
    postback_button,
    text_message,
    url_button,
)
from fbmessenger.services.messaging_protocol import (
    MessengerSender,
    MockTransport,
    SendTransport,
)

__all__ = [
    "ButtonPayload",
    "Callback",
    "CallbackAttachment",
    "CallbackMessage",
    "Delivery",
    "Entry",
    "MediaAttachment",
    "MediaPayload",
    "MessagingEntry",
    "MessagingKind",
    "MessengerError",
    "MessengerSender",
    "MockTransport",
    "NotificationType",
    "OptIn",
    "PhoneNumberRecipient",
    "Postback",
    "PostbackButton",
    "Principal",
    "RemoteError",
    "SendError",
    "SendRequest",
    "SendResponse",
    "SendTransport",
    "TemplateAttachment",
    "UrlButton",
    "UserIdRecipient",
    "UserProfile",
    "ValidationError",
    "button_template_message",
    "call_button",
    "decode_callback",
    "decode_send_request",
    "decode_send_response",
    "decode_user_profile",
    "encode_callback",
    "encode_send_request",
    "image_message",
    "media_message",
    "postback_button",
    "text_message",
    "url_button",
]
