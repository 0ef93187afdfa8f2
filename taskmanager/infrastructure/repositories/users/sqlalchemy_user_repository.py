# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.orm import selectinload

from taskmanager.domain.users.entities import Session as DomainSession
from taskmanager.domain.users.entities import User as DomainUser
from taskmanager.domain.users.repositories import UserRepository
from taskmanager.infrastructure.db.models import User, UserSession
from taskmanager.infrastructure.db.session import session_scope


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
        sessions=tuple(
            DomainSession(token=s.token, expires_at=_aware(s.expires_at)) for s in row.sessions
        ),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = (
                session.query(User)
                .options(selectinload(User.sessions))
                .filter(User.email == email)
                .first()
            )
            if not row:
                return None
            return _to_domain(row)

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = (
                session.query(User)
                .options(selectinload(User.sessions))
                .filter(User.id == user_id)
                .first()
            )
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = User(
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def add_session(self, user_id: int, session: DomainSession) -> None:
        with session_scope() as db:
            db.add(UserSession(user_id=user_id, token=session.token, expires_at=session.expires_at))

    def remove_session(self, user_id: int, token: str) -> bool:
        with session_scope() as db:
            deleted = (
                db.query(UserSession)
                .filter(UserSession.user_id == user_id, UserSession.token == token)
                .delete(synchronize_session=False)
            )
            return deleted > 0

    def purge_expired_sessions(self, user_id: int, now: datetime) -> int:
        with session_scope() as db:
            return (
                db.query(UserSession)
                .filter(UserSession.user_id == user_id, UserSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
