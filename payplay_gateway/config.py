"""Client configuration via environment variables (prefix ``PAYPLAY_``)."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Demo-mode credentials; production deployments must override all three.
    api_key: str = "demo_key"
    api_secret: str = "demo_secret"
    api_url: str = "https://api.payplay.io"

    default_callback_url: str = "https://example.com/webhook"
    http_timeout_s: float = 20.0
    log_level: str = "INFO"
    signature_tolerance_ms: int = 300_000  # 5 minutes

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PAYPLAY_"}


settings = Settings()
