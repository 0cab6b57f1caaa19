"""Shared test fixtures."""

import json

import pytest

from payplay_gateway.engine.gateway import PayPlayClient
from payplay_gateway.models.payout import Credentials
from payplay_gateway.providers.mock_transport import RecordingTransport

FIXED_NOW_MS = 1_700_000_000_000


@pytest.fixture
def fixed_now_ms() -> int:
    return FIXED_NOW_MS


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(key="k", secret="s", base_url="https://mock")


@pytest.fixture
def payout_row() -> dict:
    return {
        "id": 42,
        "amount": 100,
        "currency": "USDT",
        "wallet": "TXYZ",
        "callback_url": "https://me/cb",
    }


@pytest.fixture
def make_client(credentials):
    """Factory: client wired to a RecordingTransport that answers with ``reply``."""

    def _make(reply, **kwargs) -> tuple[PayPlayClient, RecordingTransport]:
        if isinstance(reply, dict):
            reply = json.dumps(reply)
        transport = RecordingTransport(reply)
        client = PayPlayClient(
            credentials,
            transport=transport,
            clock=lambda: FIXED_NOW_MS,
            **kwargs,
        )
        return client, transport

    return _make
