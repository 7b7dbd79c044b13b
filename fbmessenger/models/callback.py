"""Webhook callback models.

See https://developers.facebook.com/docs/messenger-platform/webhook-reference#format
"""

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from fbmessenger.constants import CALLBACK_OBJECT_PAGE


class _CallbackModel(BaseModel):
    """Base for inbound payloads: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class MessagingKind(str, Enum):
    """Interaction kind carried by a MessagingEntry."""

    MESSAGE = "message"
    DELIVERY = "delivery"
    POSTBACK = "postback"
    OPTIN = "optin"


class Principal(_CallbackModel):
    """Id of a sender or recipient."""

    id: str


class Coordinates(_CallbackModel):
    """Location shared by the user."""

    lat: float
    long: float


class CallbackAttachmentPayload(_CallbackModel):
    """URL of an attachment sent by the user, or coordinates for locations."""

    url: str | None = None
    coordinates: Coordinates | None = None


class CallbackAttachment(_CallbackModel):
    """Type and payload of an attachment sent by a user."""

    type: str
    payload: CallbackAttachmentPayload


class CallbackMessage(_CallbackModel):
    """Message a user has sent to the page.

    Either ``text`` or ``attachments`` is set, not both.

    See https://developers.facebook.com/docs/messenger-platform/webhook-reference/message-received
    """

    message_id: str = Field(alias="mid")
    sequence: int | None = Field(default=None, alias="seq")
    text: str | None = None
    attachments: tuple[CallbackAttachment, ...] | None = None


class Delivery(_CallbackModel):
    """Which of the page's sent messages have been delivered.

    Every message sent before ``watermark`` has been delivered; ``message_ids``
    may be empty.

    See https://developers.facebook.com/docs/messenger-platform/webhook-reference/message-delivered
    """

    message_ids: tuple[str, ...] = Field(default=(), alias="mids")
    watermark: int
    sequence: int | None = Field(default=None, alias="seq")


class Postback(_CallbackModel):
    """Payload of the button the user tapped."""

    payload: str
    title: str | None = None


class OptIn(_CallbackModel):
    """Data passed through the Send-to-Messenger plugin."""

    ref: str


class MessagingEntry(_CallbackModel):
    """An individual interaction a user has with a page.

    Sender and recipient are common to all callbacks; the upstream contract
    populates exactly one of the interaction fields, which is not enforced
    here.
    """

    sender: Principal
    recipient: Principal
    timestamp: int | None = None
    message: CallbackMessage | None = None
    delivery: Delivery | None = None
    postback: Postback | None = None
    optin: OptIn | None = None

    @property
    def kind(self) -> MessagingKind | None:
        """Kind of the first populated interaction field, if any."""
        for kind in MessagingKind:
            if getattr(self, kind.value) is not None:
                return kind
        return None


class Entry(_CallbackModel):
    """Per-page batch of interactions."""

    page_id: str = Field(alias="id")
    time: int
    messaging: tuple[MessagingEntry, ...] = ()


class Callback(_CallbackModel):
    """Top level structure of a webhook callback."""

    object: str
    entries: tuple[Entry, ...] = Field(alias="entry")

    @property
    def is_page(self) -> bool:
        return self.object == CALLBACK_OBJECT_PAGE

    def iter_messaging(self) -> Iterator[MessagingEntry]:
        """Yield every messaging entry across all entries, in order."""
        for entry in self.entries:
            yield from entry.messaging
