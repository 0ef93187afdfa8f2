# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskmanager.application.services.session_manager import SessionManager
from taskmanager.application.services.token_service import TokenService
from taskmanager.application.use_cases.users.credentials import IssuedCredentials
from taskmanager.domain.users.entities import User
from taskmanager.domain.users.exceptions import SignupFailedError
from taskmanager.domain.users.repositories import PasswordHasher, UserRepository
from taskmanager.shared.errors import ConfigurationError
from taskmanager.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionManager,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> IssuedCredentials:
        if not self._tokens.signing.is_configured:
            raise ConfigurationError("JWT_SECRET")

        if self._users.find_by_email(email):
            logger.info("auth.register: duplicate email")
            raise SignupFailedError()

        try:
            hashed = self._password_hasher.hash(password)
            user = User(id=0, email=email, password_hash=hashed, created_at=datetime.now(UTC))
            persisted = self._users.add(user)
        except Exception as exc:
            # Duplicate-key races and hashing failures look the same to the caller
            logger.warning(f"auth.register: storage failure ({type(exc).__name__})")
            raise SignupFailedError() from exc

        refresh_token = self._sessions.create_session(persisted)
        return IssuedCredentials(
            user=persisted,
            access_token=self._tokens.issue_access_token(persisted.id),
            refresh_token=refresh_token,
            csrf_token=self._tokens.generate_opaque_token(),
        )
