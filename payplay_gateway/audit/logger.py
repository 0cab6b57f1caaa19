"""
Audit trail for payout operations.

Every provider round trip that changes or observes a withdrawal produces an
audit event with:
  - Action (what happened)
  - External ID (which withdrawal, when known)
  - Details (request fields, provider status)
  - Timestamp (UTC)

Events are emitted through the ``payplay_gateway.audit`` logger; routing them
to durable storage is the host application's logging configuration.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger("payplay_gateway.audit")


@dataclass(frozen=True)
class AuditEvent:
    action: str
    external_id: Optional[str]
    details: Optional[dict[str, Any]]
    timestamp: datetime


def log_event(
    action: str,
    external_id: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
) -> AuditEvent:
    """
    Record an immutable audit event.

    Args:
        action: What happened (e.g. "payout_initiated", "status_synced").
        external_id: Provider withdrawal id this event relates to.
        details: Arbitrary JSON-serializable context. Never include secrets.

    Returns:
        The emitted AuditEvent.
    """
    event = AuditEvent(
        action=action,
        external_id=external_id,
        details=details,
        timestamp=datetime.now(timezone.utc),
    )
    logger.info(
        "AUDIT | external_id=%s action=%s | %s",
        external_id or "-",
        action,
        json.dumps(details, default=str)[:200] if details else "",
    )
    return event
