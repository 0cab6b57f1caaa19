"""
Sandbox emulation of the PayPlay withdrawal API.

POST /v1/withdrawals                              Create a withdrawal (signed).
GET  /v1/withdrawals/{withdrawal_id}              Look up a withdrawal (signed).
POST /sandbox/withdrawals/{withdrawal_id}/status  Force a status (unsigned, sandbox only).

Signed endpoints check the API key, the HMAC signature over the raw request
and the timestamp freshness window. All failures answer with the provider's
envelope shape ``{"status": "FAIL", "error": ...}``.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from payplay_gateway.engine.signer import verify_signature
from payplay_gateway.models.enums import EnvelopeStatus, WithdrawalStatus
from payplay_gateway.models.payout import Credentials

logger = logging.getLogger("payplay_gateway.sandbox")

router = APIRouter(prefix="/v1/withdrawals", tags=["withdrawals"])
control_router = APIRouter(prefix="/sandbox/withdrawals", tags=["sandbox"])


class SandboxError(Exception):
    """Rendered as a FAIL envelope with the given HTTP status."""

    def __init__(self, status_code: int, error: str):
        super().__init__(error)
        self.status_code = status_code
        self.error = error


class WithdrawalCreate(BaseModel):
    amount: str
    asset: str
    address: str
    external_id: str
    callback_url: str


class StatusUpdate(BaseModel):
    status: WithdrawalStatus


class WithdrawalStore:
    """Thread-safe in-memory withdrawals, indexed by id and external_id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, dict[str, Any]] = {}
        self._by_external_id: dict[str, str] = {}

    def create(self, req: WithdrawalCreate) -> tuple[dict[str, Any], bool]:
        """Returns (withdrawal, created). An existing external_id is not re-created."""
        with self._lock:
            existing = self._by_external_id.get(req.external_id)
            if existing:
                return dict(self._by_id[existing]), False

            withdrawal = {
                "id": f"wd_{uuid.uuid4().hex[:16]}",
                "external_id": req.external_id,
                "amount": req.amount,
                "asset": req.asset,
                "address": req.address,
                "callback_url": req.callback_url,
                "status": WithdrawalStatus.PROCESSING.value,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            self._by_id[withdrawal["id"]] = withdrawal
            self._by_external_id[req.external_id] = withdrawal["id"]
            return dict(withdrawal), True

    def get(self, withdrawal_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            withdrawal = self._by_id.get(withdrawal_id)
            return dict(withdrawal) if withdrawal else None

    def set_status(self, withdrawal_id: str, status: str) -> Optional[dict[str, Any]]:
        with self._lock:
            withdrawal = self._by_id.get(withdrawal_id)
            if withdrawal is None:
                return None
            withdrawal["status"] = status
            return dict(withdrawal)


def get_store(request: Request) -> WithdrawalStore:
    return request.app.state.store


def _request_path(request: Request) -> str:
    # Signatures cover the path as sent, before percent-decoding.
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


async def signed_body(request: Request) -> str:
    """Dependency: authenticate the request and return its raw body text."""
    credentials: Credentials = request.app.state.credentials
    body = (await request.body()).decode("utf-8")

    if request.headers.get("X-PAYPLAY-KEY") != credentials.key:
        logger.warning("Rejected %s %s: unknown api key", request.method, request.url.path)
        raise SandboxError(401, "unknown api key")

    valid = verify_signature(
        credentials.secret,
        request.headers.get("X-PAYPLAY-TIMESTAMP", ""),
        request.method,
        _request_path(request),
        body,
        request.headers.get("X-PAYPLAY-SIGN", ""),
        tolerance_ms=request.app.state.signature_tolerance_ms,
    )
    if not valid:
        logger.warning("Rejected %s %s: invalid signature", request.method, request.url.path)
        raise SandboxError(401, "invalid signature")
    return body


def _success(data: dict[str, Any]) -> dict[str, Any]:
    return {"status": EnvelopeStatus.SUCCESS.value, "data": data}


@router.post("")
def create_withdrawal(
    body: str = Depends(signed_body),
    store: WithdrawalStore = Depends(get_store),
):
    """Create a withdrawal, or return the existing one for a repeated external_id."""
    try:
        req = WithdrawalCreate.model_validate_json(body)
    except ValidationError as e:
        raise SandboxError(422, f"invalid withdrawal body: {e.error_count()} error(s)") from e

    withdrawal, created = store.create(req)
    logger.info(
        "Withdrawal %s %s for external_id=%s (%s %s)",
        withdrawal["id"],
        "created" if created else "replayed",
        req.external_id,
        req.amount,
        req.asset,
    )
    return _success(withdrawal)


@router.get("/{withdrawal_id}")
def get_withdrawal(
    withdrawal_id: str,
    _body: str = Depends(signed_body),
    store: WithdrawalStore = Depends(get_store),
):
    withdrawal = store.get(withdrawal_id)
    if withdrawal is None:
        raise SandboxError(404, f"withdrawal not found: {withdrawal_id}")
    return _success(withdrawal)


@control_router.post("/{withdrawal_id}/status")
def force_status(
    withdrawal_id: str,
    update: StatusUpdate,
    store: WithdrawalStore = Depends(get_store),
):
    """Move a withdrawal to another status, e.g. to simulate settlement."""
    withdrawal = store.set_status(withdrawal_id, update.status.value)
    if withdrawal is None:
        raise SandboxError(404, f"withdrawal not found: {withdrawal_id}")
    logger.info("Withdrawal %s forced to %s", withdrawal_id, update.status.value)
    return _success(withdrawal)
