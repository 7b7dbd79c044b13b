"""Exceptions raised at the Messenger wire boundary."""

from typing import Any


class MessengerError(Exception):
    """Base exception for fbmessenger errors."""

    pass


class ValidationError(MessengerError, ValueError):
    """Raised when a required field is absent or invalid at encode/decode time.

    Attributes:
        field: Dotted wire path of the offending field (e.g. ``recipient`` or
            ``entry.0.messaging.0.sender.id``)
        reason: Human readable description of the problem
    """

    def __init__(self, field: str, reason: str = "field required"):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class RemoteError(MessengerError):
    """Error object returned by the Send API, surfaced as-is.

    The fields mirror the platform's error payload; nothing is interpreted.
    """

    def __init__(
        self,
        message: str,
        type: str,
        code: int,
        fbtrace_id: str,
        error_data: Any = None,
        error_subcode: int | None = None,
    ):
        self.message = message
        self.type = type
        self.code = code
        self.fbtrace_id = fbtrace_id
        self.error_data = error_data
        self.error_subcode = error_subcode
        super().__init__(f"({type} {code}) {message} [fbtrace_id={fbtrace_id}]")
