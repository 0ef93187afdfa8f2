# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Security audit trail: one log line and one ``audit_logs`` row per event."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from taskmanager.shared.logging import logger

_REDACTED = "***REDACTED***"
_SENSITIVE_KEY_PARTS = ("password", "token", "cookie", "csrf", "xsrf", "secret", "email", "key")


class AuditAction(str, Enum):
    REGISTER = "register"
    REGISTER_FAILED = "register_failed"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    ACCESS_TOKEN_REFRESHED = "access_token_refreshed"
    SESSION_REJECTED = "session_rejected"
    CSRF_REJECTED = "csrf_rejected"


def redact_details(details: dict[str, Any] | None) -> dict[str, Any]:
    if not details:
        return {}
    return {
        key: _REDACTED if any(part in key.lower() for part in _SENSITIVE_KEY_PARTS) else value
        for key, value in details.items()
    }


@dataclass(frozen=True, slots=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None = None
    ip_address: str | None = None
    success: bool = True
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def describe(self) -> str:
        line = (
            f"AUDIT: {self.action.value} | user_id={self.user_id} "
            f"| ip={self.ip_address} | success={self.success}"
        )
        if self.details:
            line += f" | details={self.details}"
        return line


class AuditLogger:
    """Writes audit events; storage failures are logged and never raised."""

    def record(self, event: AuditEvent) -> None:
        logger.log("INFO" if event.success else "WARNING", event.describe())
        self._persist(event)

    def _persist(self, event: AuditEvent) -> None:
        from taskmanager.infrastructure.db.models import AuditLog
        from taskmanager.infrastructure.db.session import session_scope

        try:
            with session_scope() as session:
                session.add(
                    AuditLog(
                        timestamp=event.timestamp,
                        action=event.action.value,
                        user_id=event.user_id,
                        ip_address=event.ip_address,
                        success=event.success,
                        details_json=json.dumps(event.details, default=str) if event.details else None,
                    )
                )
        except SQLAlchemyError as exc:
            logger.warning("audit: could not store {} event: {}", event.action.value, exc)


audit = AuditLogger()


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    audit.record(
        AuditEvent(
            action=action,
            user_id=user_id,
            ip_address=ip_address,
            success=success,
            details=redact_details(details),
        )
    )


__all__ = [
    "AuditAction",
    "AuditEvent",
    "AuditLogger",
    "audit",
    "audit_log",
    "redact_details",
]
