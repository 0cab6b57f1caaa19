"""Tests for the httpx-backed default transport."""

import logging

import httpx
import pytest

from payplay_gateway.engine.errors import InvalidJSONError, TransportError
from payplay_gateway.engine.gateway import PayPlayClient
from payplay_gateway.providers.base import parse_header_lines
from payplay_gateway.providers.http_transport import HttpxTransport


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_sends_method_url_body_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["headers"] = request.headers
        return httpx.Response(200, text='{"status":"SUCCESS"}')

    out = _transport(handler)(
        "POST",
        "https://mock/v1/withdrawals",
        '{"amount":"1"}',
        ["Content-Type: application/json", "X-PAYPLAY-KEY: k", "X-PAYPLAY-SIGN: abc"],
    )

    assert out == '{"status":"SUCCESS"}'
    assert seen["method"] == "POST"
    assert seen["url"] == "https://mock/v1/withdrawals"
    assert seen["body"] == '{"amount":"1"}'
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["x-payplay-key"] == "k"
    assert seen["headers"]["x-payplay-sign"] == "abc"


def test_empty_body_sends_no_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.content
        return httpx.Response(200, text="{}")

    _transport(handler)("GET", "https://mock/v1/withdrawals/wd_1", "", [])
    assert seen["body"] == b""


def test_error_status_still_returns_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"status":"FAIL","error":"invalid signature"}')

    out = _transport(handler)("GET", "https://mock/x", "", [])
    assert out == '{"status":"FAIL","error":"invalid signature"}'


def test_connection_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused") as exc:
        _transport(handler)("GET", "https://mock/x", "", [])
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_transport_error_reaches_client_caller():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = PayPlayClient(transport=_transport(handler))
    with pytest.raises(TransportError):
        client.sync_status("wd_1")


def test_html_error_page_is_invalid_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    client = PayPlayClient(transport=_transport(handler))
    with pytest.raises(InvalidJSONError) as exc:
        client.sync_status("wd_1")
    assert exc.value.raw == "<html>Bad Gateway</html>"


def test_debug_log_redacts_credentials(caplog):
    caplog.set_level(logging.DEBUG, logger="payplay_gateway.transport")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="{}")

    _transport(handler)("GET", "https://mock/x", "", ["X-PAYPLAY-KEY: live_key", "X-PAYPLAY-SIGN: deadbeef"])

    text = caplog.text
    assert "REDACTED" in text
    assert "live_key" not in text
    assert "deadbeef" not in text


class TestParseHeaderLines:
    def test_keeps_order_and_strips(self):
        parsed = parse_header_lines(["A: 1", "B:2", "C:  x: y "])
        assert list(parsed.items()) == [("A", "1"), ("B", "2"), ("C", "x: y")]

    def test_malformed_line(self):
        with pytest.raises(ValueError):
            parse_header_lines(["no colon here"])
