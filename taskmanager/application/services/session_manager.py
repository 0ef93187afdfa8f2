# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from taskmanager.application.services.token_service import TokenService
from taskmanager.domain.users.entities import Session, User
from taskmanager.domain.users.repositories import UserRepository
from taskmanager.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(days=10)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Refresh-session lifecycle: Created -> Active -> Expired | Revoked.

    Expiry is lazy (checked on use). Revocation is an explicit single-row
    delete keyed by ``(user_id, token)``.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._session_ttl = session_ttl
        self._clock = clock

    def create_session(self, user: User) -> str:
        now = self._clock()
        session = Session(
            token=self._tokens.generate_opaque_token(),
            expires_at=now + self._session_ttl,
        )
        purged = self._users.purge_expired_sessions(user.id, now)
        if purged:
            logger.debug(f"sessions: purged {purged} expired session(s) user_id={user.id}")
        self._users.add_session(user.id, session)
        logger.debug(f"sessions: created user_id={user.id} expires_at={session.expires_at.isoformat()}")
        return self._tokens.sign_refresh_token(user.id, session.token)

    def find_user_by_refresh_token(self, refresh_token: str | None) -> User | None:
        envelope = self._tokens.unsign_refresh_token(refresh_token)
        if envelope is None:
            return None
        user_id, session_token = envelope
        user = self._users.find_by_id(user_id)
        if user is None or user.find_session(session_token) is None:
            return None
        return user

    def find_session(self, user: User, refresh_token: str | None) -> Session | None:
        envelope = self._tokens.unsign_refresh_token(refresh_token)
        if envelope is None:
            return None
        user_id, session_token = envelope
        if user_id != user.id:
            return None
        return user.find_session(session_token)

    def is_session_expired(self, expires_at: datetime) -> bool:
        return expires_at <= self._clock()

    def remove_session(self, user: User, refresh_token: str | None) -> bool:
        envelope = self._tokens.unsign_refresh_token(refresh_token)
        if envelope is None or envelope[0] != user.id:
            return False
        removed = self._users.remove_session(user.id, envelope[1])
        logger.debug(f"sessions: remove user_id={user.id} removed={removed}")
        return removed


__all__ = ["DEFAULT_SESSION_TTL", "SessionManager"]
