# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Access-token minting and verification.

Access tokens are short-lived HS256 JWTs carried in the ``x-access-token``
header. Refresh tokens are opaque to the client but are an itsdangerous-signed
envelope ``{"uid", "sid"}`` so the owning user can be found without scanning
every session; revocation still depends on the stored session row.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from itsdangerous import BadData, URLSafeSerializer

from taskmanager.shared.config.settings import AuthConfig
from taskmanager.shared.errors import ConfigurationError, InvalidTokenError

_REFRESH_SALT = "refresh-token"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class TokenSigningConfig:
    secret: str | None
    algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)

    @classmethod
    def from_settings(cls, auth: AuthConfig) -> "TokenSigningConfig":
        return cls(
            secret=auth.jwt_secret,
            algorithm=auth.jwt_algorithm,
            access_token_ttl=timedelta(seconds=auth.access_token_ttl),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.secret)


class TokenService:
    def __init__(
        self,
        signing: TokenSigningConfig,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._signing = signing
        self._clock = clock

    @property
    def signing(self) -> TokenSigningConfig:
        return self._signing

    def _require_secret(self) -> str:
        if not self._signing.secret:
            raise ConfigurationError("JWT_SECRET")
        return self._signing.secret

    def issue_access_token(self, user_id: int) -> str:
        secret = self._require_secret()
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._signing.access_token_ttl,
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, secret, algorithm=self._signing.algorithm)

    def verify_access_token(self, token: str | None) -> int:
        secret = self._require_secret()
        if not token:
            raise InvalidTokenError("missing")
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self._signing.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("invalid") from exc

        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("invalid") from exc

    @staticmethod
    def generate_opaque_token(byte_length: int = 32) -> str:
        return secrets.token_hex(byte_length)

    def _refresh_serializer(self) -> URLSafeSerializer:
        return URLSafeSerializer(self._require_secret(), salt=_REFRESH_SALT)

    def sign_refresh_token(self, user_id: int, session_token: str) -> str:
        return self._refresh_serializer().dumps({"uid": user_id, "sid": session_token})

    def unsign_refresh_token(self, token: str | None) -> tuple[int, str] | None:
        if not token:
            return None
        try:
            data = self._refresh_serializer().loads(token)
        except BadData:
            return None
        if not isinstance(data, dict):
            return None
        uid, sid = data.get("uid"), data.get("sid")
        if not isinstance(uid, int) or not isinstance(sid, str) or not sid:
            return None
        return uid, sid


__all__ = ["TokenService", "TokenSigningConfig"]
