"""
Error taxonomy for PayPlay calls.

  - ProtocolError: the provider answered, but not with a usable envelope.
      - InvalidJSONError: the reply is not a JSON object.
      - RemoteErrorPayload: the envelope status is not SUCCESS.
  - TransportError: the request never produced a reply (raised by HttpxTransport).

Protocol errors carry the raw response text for diagnosis. Nothing here is
retried; that policy belongs to whoever calls the client.
"""

from typing import Any, Optional


class GatewayError(Exception):
    """Base exception for everything raised by payplay_gateway."""


class ProtocolError(GatewayError):
    """The provider's reply could not be accepted."""

    kind = "protocol error"

    def __init__(self, message: str, raw: str):
        super().__init__(message)
        self.raw = raw


class InvalidJSONError(ProtocolError):
    kind = "invalid JSON"

    def __init__(self, raw: str):
        super().__init__(f"Invalid JSON from PayPlay: {raw}", raw)


class RemoteErrorPayload(ProtocolError):
    kind = "remote error payload"

    def __init__(self, raw: str, remote_status: Any = None, error: Optional[Any] = None):
        super().__init__(f"PayPlay error payload: {raw}", raw)
        self.remote_status = remote_status
        self.error = error


class TransportError(GatewayError):
    """The HTTP exchange itself failed (connection refused, timeout, ...)."""
