"""
Payout data model.

PayoutRequest mirrors the caller's payout row (id, amount, currency, wallet,
callback_url) and knows how to render itself as the provider's withdrawal
body. Amount and id always go over the wire as strings so the signed bytes
never depend on float formatting.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from payplay_gateway.config import Settings

Amount = Union[str, int, float, Decimal]


@dataclass(frozen=True)
class Credentials:
    """API key, signing secret and base endpoint for one client instance."""

    key: str
    secret: str
    base_url: str

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        return cls(key=settings.api_key, secret=settings.api_secret, base_url=settings.api_url)


@dataclass
class PayoutRequest:
    """A withdrawal to initiate."""

    id: Union[str, int]  # caller's correlation / idempotency key
    amount: Amount
    currency: str
    wallet: str  # destination address
    callback_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PayoutRequest":
        """Build from a payout row. Missing required keys raise KeyError."""
        return cls(
            id=row["id"],
            amount=row["amount"],
            currency=row["currency"],
            wallet=row["wallet"],
            callback_url=row.get("callback_url"),
        )

    def to_payload(self, default_callback_url: str) -> dict[str, str]:
        """Provider body. Key order is part of the signed bytes."""
        return {
            "amount": stringify_amount(self.amount),
            "asset": self.currency,
            "address": self.wallet,
            "external_id": str(self.id),
            "callback_url": self.callback_url if self.callback_url is not None else default_callback_url,
        }


@dataclass
class PayoutResult:
    """Outcome of initiating a payout."""

    external_id: Optional[str]  # provider's withdrawal id
    status: str
    raw: str  # serialized provider payload, kept for audit


def stringify_amount(amount: Amount) -> str:
    if isinstance(amount, bool):
        raise TypeError(f"Payout amount must be numeric, got {amount!r}")
    if isinstance(amount, Decimal):
        return format(amount, "f")
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)
