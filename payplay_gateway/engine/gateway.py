"""
PayPlay gateway client.

Initiates blockchain withdrawals and polls their status. Each public call is
exactly one signed round trip:

  1. Serialize the body (compact JSON, forward slashes left unescaped)
  2. Sign timestamp/method/path/body with the shared secret
  3. Hand the request to the injected transport
  4. Validate the JSON envelope and unwrap its ``data`` payload

The client keeps no state besides its credentials, so one instance can be
shared between threads provided the transport can. Retries, persistence and
scheduling of status polls are left to the caller.
"""

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import quote

from payplay_gateway.audit.logger import log_event
from payplay_gateway.config import settings
from payplay_gateway.engine.errors import InvalidJSONError, RemoteErrorPayload
from payplay_gateway.engine.signer import canonical_string, sign
from payplay_gateway.models.enums import EnvelopeStatus, WithdrawalStatus
from payplay_gateway.models.payout import Credentials, PayoutRequest, PayoutResult
from payplay_gateway.providers.base import TransportFn
from payplay_gateway.providers.http_transport import HttpxTransport

logger = logging.getLogger("payplay_gateway.gateway")

WITHDRAWALS_PATH = "/v1/withdrawals"
HEADER_PREFIX = "X-PAYPLAY"


def _now_ms() -> int:
    return int(time.time() * 1000)


def serialize_body(body: Optional[Mapping[str, Any]]) -> str:
    """Wire JSON for ``body``; empty string when there is nothing to send."""
    if not body:
        return ""
    return json.dumps(dict(body), separators=(",", ":"))


class PayPlayClient:
    """
    Signed-request client for the PayPlay withdrawal API.

    Args:
        credentials: API key, secret and base URL. Defaults to the values in
            ``payplay_gateway.config.settings`` (demo mode unless overridden).
        transport: ``(method, url, body, headers) -> str``. Defaults to
            :class:`~payplay_gateway.providers.http_transport.HttpxTransport`.
        default_callback_url: Used for payouts that carry no callback URL.
        clock: Returns the current time in integer milliseconds.
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        transport: Optional[TransportFn] = None,
        default_callback_url: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._credentials = credentials or Credentials.from_settings(settings)
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else HttpxTransport()
        self._default_callback_url = default_callback_url or settings.default_callback_url
        self._clock = clock or _now_ms

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def close(self) -> None:
        """Release the default HTTP transport. Injected transports are left open."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "PayPlayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def signed_request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Perform one signed call and return the unwrapped payload.

        Returns the envelope's ``data`` field, or the whole envelope when the
        provider inlines its fields instead of nesting them.

        Raises:
            InvalidJSONError: The reply is not a JSON object or array.
            RemoteErrorPayload: The envelope status is present and not SUCCESS.
            Exception: Whatever the transport raises, unchanged.
        """
        timestamp = str(self._clock())
        json_body = serialize_body(body)
        signature = sign(
            self._credentials.secret,
            canonical_string(timestamp, method, path, json_body),
        )

        headers = [
            "Content-Type: application/json",
            f"{HEADER_PREFIX}-KEY: {self._credentials.key}",
            f"{HEADER_PREFIX}-TIMESTAMP: {timestamp}",
            f"{HEADER_PREFIX}-SIGN: {signature}",
        ]
        url = self._credentials.base_url + path

        logger.debug("PayPlay %s %s ts=%s", method, path, timestamp)
        raw = self._transport(method, url, json_body, headers)

        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            data = None
        if not isinstance(data, (dict, list)):
            logger.warning("PayPlay %s %s returned invalid JSON: %.200s", method, path, raw)
            raise InvalidJSONError(raw)
        if isinstance(data, list):
            # Arrays carry no envelope: implicit success, returned unchanged.
            return data

        # A missing status is an implicit success.
        status = data.get("status")
        if status is None:
            status = EnvelopeStatus.SUCCESS.value
        if status != EnvelopeStatus.SUCCESS.value:
            logger.warning("PayPlay %s %s returned error payload: %.200s", method, path, raw)
            raise RemoteErrorPayload(raw, remote_status=status, error=data.get("error"))

        payload = data.get("data")
        return payload if payload is not None else data

    def initiate_payout(self, request: Union[PayoutRequest, Mapping[str, Any]]) -> PayoutResult:
        """Create a withdrawal. Accepts a PayoutRequest or a payout row mapping."""
        if not isinstance(request, PayoutRequest):
            request = PayoutRequest.from_row(request)

        payload = request.to_payload(self._default_callback_url)
        resp = self.signed_request("POST", WITHDRAWALS_PATH, payload)

        external_id = _field(resp, "id")
        status = _field(resp, "status")
        result = PayoutResult(
            external_id=str(external_id) if external_id is not None else None,
            status=status if status is not None else WithdrawalStatus.PROCESSING.value,
            raw=json.dumps(resp, ensure_ascii=False),
        )

        log_event("payout_initiated", external_id=result.external_id, details={
            "payout_id": payload["external_id"],
            "amount": payload["amount"],
            "asset": payload["asset"],
            "status": result.status,
        })
        return result

    def sync_status(self, external_id: str) -> str:
        """Fetch the provider's current status for a withdrawal."""
        path = f"{WITHDRAWALS_PATH}/{quote(str(external_id), safe='')}"
        resp = self.signed_request("GET", path)

        status = _field(resp, "status")
        if status is None:
            status = WithdrawalStatus.UNKNOWN.value

        log_event("status_synced", external_id=str(external_id), details={"status": status})
        return status


def _field(payload: Any, key: str) -> Any:
    # Non-object payloads carry no fields.
    if isinstance(payload, Mapping):
        return payload.get(key)
    return None
