"""Tests for audit event emission."""

import logging

from payplay_gateway.audit.logger import log_event


def test_log_event(caplog):
    caplog.set_level(logging.INFO, logger="payplay_gateway.audit")
    event = log_event("status_synced", external_id="wd_1", details={"status": "CONFIRMED"})

    assert event.action == "status_synced"
    assert event.external_id == "wd_1"
    assert event.timestamp.tzinfo is not None
    assert 'AUDIT | external_id=wd_1 action=status_synced | {"status": "CONFIRMED"}' in caplog.text


def test_log_event_without_context(caplog):
    caplog.set_level(logging.INFO, logger="payplay_gateway.audit")
    event = log_event("payout_initiated")

    assert event.external_id is None
    assert event.details is None
    assert "AUDIT | external_id=- action=payout_initiated | " in caplog.text
