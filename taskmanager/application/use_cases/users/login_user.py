# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from taskmanager.application.services.session_manager import SessionManager
from taskmanager.application.services.token_service import TokenService
from taskmanager.application.use_cases.users.credentials import IssuedCredentials
from taskmanager.domain.users.exceptions import InvalidCredentialsError
from taskmanager.domain.users.repositories import PasswordHasher, UserRepository
from taskmanager.shared.errors import ConfigurationError


class LoginUserUseCase:
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
        # Unknown emails still pay for one hash check
        self._dummy_hash = password_hasher.hash(secrets.token_hex(16))

    def execute(self, email: str, password: str) -> IssuedCredentials:
        if not self._tokens.signing.is_configured:
            raise ConfigurationError("JWT_SECRET")

        user = self._users.find_by_email(email)
        hashed = user.password_hash if user is not None else self._dummy_hash
        password_valid = self._password_hasher.verify(password, hashed)
        if user is None or not password_valid:
            raise InvalidCredentialsError()

        refresh_token = self._sessions.create_session(user)
        return IssuedCredentials(
            user=user,
            access_token=self._tokens.issue_access_token(user.id),
            refresh_token=refresh_token,
            csrf_token=self._tokens.generate_opaque_token(),
        )
