# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for minting a fresh access token from a validated session."""

from __future__ import annotations

from taskmanager.application.services.token_service import TokenService
from taskmanager.application.use_cases.users.credentials import IssuedCredentials
from taskmanager.domain.users.entities import User


class RefreshAccessTokenUseCase:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, user: User, refresh_token: str) -> IssuedCredentials:
        # The refresh token is handed back unchanged so its cookie can be re-set
        return IssuedCredentials(
            user=user,
            access_token=self._tokens.issue_access_token(user.id),
            refresh_token=refresh_token,
            csrf_token=self._tokens.generate_opaque_token(),
        )
