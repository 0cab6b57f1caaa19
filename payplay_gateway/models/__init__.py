from payplay_gateway.models.enums import EnvelopeStatus, WithdrawalStatus
from payplay_gateway.models.payout import Credentials, PayoutRequest, PayoutResult

__all__ = [
    "Credentials",
    "PayoutRequest",
    "PayoutResult",
    "EnvelopeStatus",
    "WithdrawalStatus",
]
