"""Transport abstraction for handing encoded requests to the Send API.

This package does not talk HTTP. The application supplies a SendTransport
(an httpx client wrapper, a queue producer, ...) and MessengerSender glues
it to the codec:

- requests are validated and encoded before the transport sees them
- responses are decoded and remote errors raised as RemoteError
- nothing is retried
"""

from typing import Any, Protocol

import logfire

from fbmessenger.models.send import SendRequest, SendResponse
from fbmessenger.services.codec import (
    RawPayload,
    decode_send_response,
    encode_send_request,
)


class SendTransport(Protocol):
    """Protocol for delivering an encoded SendRequest.

    Implementations post ``payload`` to the Send API and return the response
    body (parsed or raw). Transport failures are the implementation's to
    raise.
    """

    async def send(self, payload: dict[str, Any]) -> RawPayload:
        """Deliver payload and return the response body."""
        ...


class MessengerSender:
    """Send SendRequests through a SendTransport.

    Example:
        >>> sender = MessengerSender(MockTransport())
        >>> response = await sender.send(text_message("Hello!").to("user123"))
        >>> response.message_id
        'mid.mock'
    """

    def __init__(self, transport: SendTransport):
        if transport is None:
            raise ValueError("transport is required")
        self._transport = transport

    async def send(self, request: SendRequest) -> SendResponse:
        """Encode, deliver and decode one request.

        Raises:
            ValidationError: request is incomplete or the response malformed
            RemoteError: the Send API returned an error object
        """
        payload = encode_send_request(request)
        with logfire.span("messenger_send"):
            body = await self._transport.send(payload)
        return decode_send_response(body)


class MockTransport:
    """Mock transport for testing.

    Records every payload and answers with a canned response body.

    Example:
        >>> transport = MockTransport()
        >>> await MessengerSender(transport).send(text_message("Hi").to("user123"))
        >>> transport.sent_payloads
        [{'recipient': {'id': 'user123'}, 'message': {'text': 'Hi'}}]
    """

    def __init__(self, response: RawPayload | None = None):
        """Initialize mock transport.

        Args:
            response: Body to return from send. Defaults to a success body
                echoing the payload's recipient id.
        """
        self._response = response
        self.sent_payloads: list[dict[str, Any]] = []

    async def send(self, payload: dict[str, Any]) -> RawPayload:
        """Record payload and return the configured body."""
        self.sent_payloads.append(payload)
        if self._response is not None:
            return self._response
        recipient = payload.get("recipient", {})
        return {
            "recipient_id": recipient.get("id", "phone-recipient"),
            "message_id": "mid.mock",
        }
