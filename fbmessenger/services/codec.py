"""Encode and decode Messenger payloads at the wire boundary.

This is the single place payloads are validated:

1. Encoding a SendRequest rejects a missing recipient or message
2. Decoding translates pydantic errors into ValidationError naming the
   offending wire path
3. Decoding a SendResponse surfaces an embedded error object as RemoteError

Decoders accept an already parsed ``dict`` or the raw JSON body as
``str``/``bytes``.
"""

from types import UnionType
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin

import logfire
from pydantic import BaseModel, Tag
from pydantic import ValidationError as PydanticValidationError

from fbmessenger.errors import ValidationError
from fbmessenger.logging_config import loggable_id
from fbmessenger.models.callback import Callback
from fbmessenger.models.send import (
    PhoneNumberRecipient,
    SendRequest,
    SendResponse,
    UserIdRecipient,
)
from fbmessenger.models.user_models import UserProfile

RawPayload = dict[str, Any] | str | bytes

ModelT = TypeVar("ModelT", bound=BaseModel)

# Reported as the field of errors not tied to a key, e.g. malformed JSON
ROOT_FIELD = "body"

_SEND_REQUEST_REQUIRED = ("recipient", "message")
_SEND_RESPONSE_REQUIRED = ("recipient_id", "message_id")


def _unwrap(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip Annotated metadata and Optional from an annotation."""
    metadata: tuple[Any, ...] = ()
    while True:
        if get_origin(annotation) is Annotated:
            metadata += annotation.__metadata__
            annotation = get_args(annotation)[0]
            continue
        if get_origin(annotation) in (Union, UnionType):
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                annotation = members[0]
                continue
        return annotation, metadata


def _union_member(members: tuple[Any, ...], tag: int | str) -> Any:
    """Find the union member pydantic reported under ``tag``.

    ``tag`` is a ``Tag(...)`` value, a literal discriminator value or, for
    plain unions, the member's type name.
    """
    for member in members:
        base, metadata = _unwrap(member)
        if any(isinstance(item, Tag) and item.tag == tag for item in metadata):
            return base
        if getattr(base, "__name__", None) == tag:
            return base
        if isinstance(base, type) and issubclass(base, BaseModel):
            for field in base.model_fields.values():
                if get_origin(field.annotation) is Literal and tag in get_args(
                    field.annotation
                ):
                    return base
    return None


def _model_field(model: type[BaseModel], key: int | str) -> Any:
    for name, field in model.model_fields.items():
        if key in (name, field.alias):
            return field.annotation
    return None


def _field_path(model: type[BaseModel], loc: tuple[int | str, ...]) -> str:
    """Turn a pydantic error location into the dotted wire path.

    Pydantic inserts the chosen member of a union into ``loc``
    (``recipient.id.id``, ``timezone.int``); those segments never appear
    in the payload and are dropped by walking ``loc`` alongside the model.
    """
    path: list[int | str] = []
    parts = list(loc)
    current: Any = model
    while parts:
        current, _ = _unwrap(current)
        origin = get_origin(current)
        if isinstance(current, type) and issubclass(current, BaseModel):
            key = parts.pop(0)
            path.append(key)
            current = _model_field(current, key)
        elif origin in (tuple, list):
            path.append(parts.pop(0))
            current = get_args(current)[0]
        elif origin in (Union, UnionType):
            current = _union_member(get_args(current), parts.pop(0))
        else:
            path.extend(parts)
            break
        if current is None:
            path.extend(parts)
            break
    return ".".join(str(part) for part in path) or ROOT_FIELD


def _validate(model: type[ModelT], raw: RawPayload, payload_name: str) -> ModelT:
    """Validate ``raw`` into ``model``, raising ValidationError on failure."""
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return model.model_validate_json(raw)
        return model.model_validate(raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = _field_path(model, first["loc"])
        logfire.warn(
            "Payload validation failed",
            payload=payload_name,
            field=field,
            error_type=first["type"],
            error_count=e.error_count(),
        )
        raise ValidationError(field, first["msg"]) from e


def _is_missing(value: Any) -> bool:
    """Absent, empty, or a recipient whose identifier is empty."""
    if isinstance(value, UserIdRecipient):
        return not value.id
    if isinstance(value, PhoneNumberRecipient):
        return not value.phone_number
    return value is None or value == ""


def _require(model: BaseModel, fields: tuple[str, ...], payload_name: str) -> None:
    for field in fields:
        if _is_missing(getattr(model, field)):
            logfire.warn(
                "Payload missing required field",
                payload=payload_name,
                field=field,
            )
            raise ValidationError(field)


def _recipient_for_log(request: SendRequest) -> str:
    recipient = request.recipient
    if isinstance(recipient, UserIdRecipient):
        return loggable_id(recipient.id)
    if isinstance(recipient, PhoneNumberRecipient):
        return loggable_id(recipient.phone_number)
    return ""


def _message_kind(request: SendRequest) -> str | None:
    if request.text is not None:
        return "text"
    if request.attachment is not None:
        return request.attachment.type
    return None


# =============================================================================
# Send API
# =============================================================================


def encode_send_request(request: SendRequest) -> dict[str, Any]:
    """
    Encode a SendRequest into its JSON-ready wire shape.

    Args:
        request: Request to encode

    Returns:
        ``{"recipient": {...}, "message": {...}, "notification_type"?: ...}``
        with absent optional fields omitted

    Raises:
        ValidationError: recipient or message is not set
    """
    _require(request, _SEND_REQUEST_REQUIRED, "send_request")

    payload = request.model_dump(mode="json", exclude_none=True)

    logfire.info(
        "Encoded send request",
        recipient=_recipient_for_log(request),
        message_kind=_message_kind(request),
        notification_type=payload.get("notification_type"),
    )
    return payload


def decode_send_request(raw: RawPayload) -> SendRequest:
    """Decode a wire SendRequest; recipient and message are required."""
    request = _validate(SendRequest, raw, "send_request")
    _require(request, _SEND_REQUEST_REQUIRED, "send_request")
    return request


def decode_send_response(
    raw: RawPayload, *, raise_on_error: bool = True
) -> SendResponse:
    """
    Decode a Send API response.

    Args:
        raw: Response body
        raise_on_error: Raise RemoteError when the body carries an error
            object. When False the response is returned with ``error`` set.

    Returns:
        Decoded response. Without an error, recipient_id and message_id are
        guaranteed to be set.

    Raises:
        RemoteError: The body carries an error object (and raise_on_error)
        ValidationError: The body is malformed
    """
    response = _validate(SendResponse, raw, "send_response")

    if response.error is not None:
        logfire.error(
            "Send API returned an error",
            code=response.error.code,
            error_type=response.error.type,
            error_subcode=response.error.error_subcode,
            fbtrace_id=response.error.fbtrace_id,
            error=response.error.message,
        )
        if raise_on_error:
            response.raise_for_error()
        return response

    _require(response, _SEND_RESPONSE_REQUIRED, "send_response")
    logfire.info(
        "Decoded send response",
        recipient_id=loggable_id(response.recipient_id),
        message_id=response.message_id,
    )
    return response


# =============================================================================
# Webhook
# =============================================================================


def decode_callback(raw: RawPayload) -> Callback:
    """Decode a webhook callback body."""
    callback = _validate(Callback, raw, "callback")
    logfire.info(
        "Decoded webhook callback",
        object=callback.object,
        entry_count=len(callback.entries),
        messaging_count=sum(len(entry.messaging) for entry in callback.entries),
    )
    return callback


def encode_callback(callback: Callback) -> dict[str, Any]:
    """Encode a Callback back into its wire shape (e.g. for fixtures or relays)."""
    return callback.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# User Profile
# =============================================================================


def decode_user_profile(raw: RawPayload) -> UserProfile:
    """Decode a User Profile API response."""
    profile = _validate(UserProfile, raw, "user_profile")
    logfire.info(
        "Decoded user profile",
        has_name=bool(profile.first_name),
        locale=profile.locale,
    )
    return profile
