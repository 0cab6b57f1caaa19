"""Tests for environment-driven configuration."""

from payplay_gateway.config import Settings
from payplay_gateway.models.payout import Credentials


def test_demo_defaults(monkeypatch):
    for name in ("PAYPLAY_API_KEY", "PAYPLAY_API_SECRET", "PAYPLAY_API_URL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.api_key == "demo_key"
    assert s.api_secret == "demo_secret"
    assert s.api_url == "https://api.payplay.io"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PAYPLAY_API_KEY", "live_key")
    monkeypatch.setenv("PAYPLAY_API_SECRET", "live_secret")
    monkeypatch.setenv("PAYPLAY_API_URL", "https://api.example.test/")
    monkeypatch.setenv("PAYPLAY_HTTP_TIMEOUT_S", "5")

    s = Settings(_env_file=None)
    assert s.api_key == "live_key"
    assert s.http_timeout_s == 5.0

    creds = Credentials.from_settings(s)
    assert creds == Credentials(key="live_key", secret="live_secret", base_url="https://api.example.test")
