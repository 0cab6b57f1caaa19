"""Default production transport backed by httpx."""

import logging
from typing import Optional

import httpx

from payplay_gateway.config import settings
from payplay_gateway.engine.errors import TransportError
from payplay_gateway.providers.base import Transport, parse_header_lines

logger = logging.getLogger("payplay_gateway.transport")

_REDACTED_HEADERS = ("X-PAYPLAY-KEY", "X-PAYPLAY-SIGN")


class HttpxTransport(Transport):
    """
    Sends signed requests with an ``httpx.Client``.

    The response text is returned whatever the HTTP status code: the provider
    reports failures inside its JSON envelope, and the client decides. Only a
    missing reply (DNS, connect, timeout) raises, as TransportError.
    """

    def __init__(self, timeout_s: Optional[float] = None, client: Optional[httpx.Client] = None):
        self._client = client or httpx.Client(
            timeout=timeout_s if timeout_s is not None else settings.http_timeout_s,
        )

    def __call__(self, method: str, url: str, body: str, headers: list[str]) -> str:
        header_map = parse_header_lines(headers)
        try:
            r = self._client.request(
                method,
                url,
                content=body.encode("utf-8") if body else None,
                headers=header_map,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}") from e

        logger.debug(
            "%s %s headers=%s -> %d %s",
            method,
            url,
            _redact(header_map),
            r.status_code,
            r.text[:300],
        )
        return r.text

    def close(self) -> None:
        self._client.close()


def _redact(headers: dict[str, str]) -> dict[str, str]:
    safe = dict(headers)
    for name in _REDACTED_HEADERS:
        if name in safe:
            safe[name] = "REDACTED"
    return safe
