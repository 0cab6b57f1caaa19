"""
PayPlay Sandbox: a local stand-in for the PayPlay withdrawal API.

Verifies request signatures exactly like the real provider and keeps
withdrawals in memory, so the client can be exercised end to end without
network access or real funds.

Start the server:
    uvicorn payplay_gateway.main:app --reload

Then point a client at it with PAYPLAY_API_URL=http://127.0.0.1:8000.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from payplay_gateway.api.withdrawals import SandboxError, WithdrawalStore
from payplay_gateway.api.withdrawals import control_router as sandbox_router
from payplay_gateway.api.withdrawals import router as withdrawals_router
from payplay_gateway.config import settings
from payplay_gateway.models.enums import EnvelopeStatus
from payplay_gateway.models.payout import Credentials

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


async def _sandbox_error_handler(request: Request, exc: SandboxError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": EnvelopeStatus.FAIL.value, "error": exc.error},
    )


def create_app(
    credentials: Optional[Credentials] = None,
    signature_tolerance_ms: Optional[int] = None,
) -> FastAPI:
    """Build a sandbox app with its own credentials and empty withdrawal store."""
    app = FastAPI(
        title="PayPlay Sandbox",
        description="Signed withdrawal API emulation for local development and tests.",
        version="0.1.0",
    )
    app.state.credentials = credentials or Credentials.from_settings(settings)
    app.state.signature_tolerance_ms = (
        signature_tolerance_ms if signature_tolerance_ms is not None else settings.signature_tolerance_ms
    )
    app.state.store = WithdrawalStore()

    app.add_exception_handler(SandboxError, _sandbox_error_handler)
    app.include_router(withdrawals_router)
    app.include_router(sandbox_router)
    return app


app = create_app()
