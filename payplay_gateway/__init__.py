"""PayPlay payout gateway client: signed withdrawal requests and status polling."""

from payplay_gateway.engine.errors import (
    GatewayError,
    InvalidJSONError,
    ProtocolError,
    RemoteErrorPayload,
    TransportError,
)
from payplay_gateway.engine.gateway import PayPlayClient
from payplay_gateway.engine.signer import canonical_string, sign, verify_signature
from payplay_gateway.models import (
    Credentials,
    EnvelopeStatus,
    PayoutRequest,
    PayoutResult,
    WithdrawalStatus,
)
from payplay_gateway.providers.base import Transport, TransportFn
from payplay_gateway.providers.http_transport import HttpxTransport

__all__ = [
    "PayPlayClient",
    "Credentials",
    "PayoutRequest",
    "PayoutResult",
    "EnvelopeStatus",
    "WithdrawalStatus",
    "Transport",
    "TransportFn",
    "HttpxTransport",
    "canonical_string",
    "sign",
    "verify_signature",
    "GatewayError",
    "ProtocolError",
    "InvalidJSONError",
    "RemoteErrorPayload",
    "TransportError",
]
