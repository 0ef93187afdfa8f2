from __future__ import annotations

from contextlib import contextmanager

from loguru import logger
from sqlalchemy.exc import OperationalError

from taskmanager.infrastructure.audit import AuditAction, AuditEvent, audit_log, redact_details
from taskmanager.infrastructure.db import session as db_session


def test_redact_details_masks_credential_keys() -> None:
    details = {"refreshToken": "abc", "Password": "x", "reason": "expired", "userEmail": "a@b.c"}

    assert redact_details(details) == {
        "refreshToken": "***REDACTED***",
        "Password": "***REDACTED***",
        "reason": "expired",
        "userEmail": "***REDACTED***",
    }
    assert redact_details(None) == {}


def test_event_description_includes_details() -> None:
    event = AuditEvent(action=AuditAction.LOGOUT, user_id=7, ip_address="10.0.0.1", details={"n": 1})

    assert event.describe() == "AUDIT: logout | user_id=7 | ip=10.0.0.1 | success=True | details={'n': 1}"


def test_storage_failure_does_not_raise(monkeypatch) -> None:
    @contextmanager
    def broken_scope():
        raise OperationalError("INSERT", {}, Exception("db down"))
        yield  # pragma: no cover

    monkeypatch.setattr(db_session, "session_scope", broken_scope)
    captured: list[str] = []
    handler_id = logger.add(captured.append, format="{level} {message}")
    try:
        audit_log(AuditAction.LOGIN_FAILED, ip_address="127.0.0.1", success=False)
    finally:
        logger.remove(handler_id)

    assert any("WARNING AUDIT: login_failed" in line for line in captured)
    assert any("audit: could not store login_failed event" in line for line in captured)
