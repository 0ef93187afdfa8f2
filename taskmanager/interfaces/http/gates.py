# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-view authorization gates.

``access_token_required`` guards resource endpoints using the short-lived
``x-access-token`` header and never touches storage. ``session_required``
guards only the refresh endpoint and resolves the ``refreshToken`` cookie to
a stored, unexpired session. CSRF is checked by
:func:`taskmanager.shared.middleware.csrf.csrf_required`, stacked inside the
session gate so an unknown session fails with 401 before the 403.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from taskmanager.application.services.session_manager import SessionManager
from taskmanager.application.services.token_service import TokenService
from taskmanager.domain.users.entities import User
from taskmanager.infrastructure.audit import AuditAction, audit_log
from taskmanager.shared.config import AuthConfig
from taskmanager.shared.errors import SessionExpiredError, SessionNotFoundError
from taskmanager.shared.logging import logger
from taskmanager.shared.middleware.client import client_ip


def current_user_id() -> int:
    """Return the user id bound to ``g`` by one of the gates."""
    return int(g.user_id)


def current_user() -> User:
    return g.user


def current_refresh_token() -> str:
    return g.refresh_token


class AuthGates:
    def __init__(
        self,
        *,
        tokens: TokenService,
        sessions: SessionManager,
        settings: AuthConfig,
    ) -> None:
        self._tokens = tokens
        self._sessions = sessions
        self._settings = settings

    def access_token_required(self, f: Callable):
        @wraps(f)
        def inner(*a, **kw):
            token = request.headers.get(self._settings.access_token_header)
            user_id = self._tokens.verify_access_token(token)
            g.user_id = user_id
            logger.debug(f"auth: access ok user_id={user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner

    def session_required(self, f: Callable):
        @wraps(f)
        def inner(*a, **kw):
            refresh_token = request.cookies.get(self._settings.refresh_cookie)
            if not refresh_token:
                self._reject("missing_cookie")
                raise SessionNotFoundError("missing_cookie")

            user = self._sessions.find_user_by_refresh_token(refresh_token)
            session = self._sessions.find_session(user, refresh_token) if user else None
            if user is None or session is None:
                self._reject("unknown_session")
                raise SessionNotFoundError("unknown_session")

            if self._sessions.is_session_expired(session.expires_at):
                self._reject("expired", user_id=user.id)
                raise SessionExpiredError()

            g.user_id = user.id
            g.user = user
            g.refresh_token = refresh_token
            logger.debug(f"auth: session ok user_id={user.id}")
            return f(*a, **kw)

        return inner

    @staticmethod
    def _reject(reason: str, *, user_id: int | None = None) -> None:
        logger.info(f"auth: session rejected ({reason}) {request.method} {request.path}")
        audit_log(
            AuditAction.SESSION_REJECTED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"reason": reason},
            success=False,
        )


__all__ = ["AuthGates", "current_refresh_token", "current_user", "current_user_id"]
