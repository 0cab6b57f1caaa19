"""Enumerations for the PayPlay wire protocol."""

from enum import Enum


class EnvelopeStatus(str, Enum):
    """Outer envelope status. Anything other than SUCCESS is a failure."""

    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


class WithdrawalStatus(str, Enum):
    """Withdrawal lifecycle states as reported by the provider."""

    PROCESSING = "PROCESSING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"
